"""FastAPI web adapter for the LC-3 simulator."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lc3sim import run_program, RunOptions
from lc3sim.memory import MEMORY_SIZE


# Constants
MAX_PROGRAM_SIZE = 16 * 1024  # 16KB


# Request/Response models
class RunOptionsModel(BaseModel):
    max_steps: int = Field(default=10000, ge=1, le=1000000)
    trace: bool = True
    trace_watch: list[int] = Field(default_factory=list)
    trace_include_registers: bool = True


class RunRequest(BaseModel):
    program: str
    options: Optional[RunOptionsModel] = None


class RunResponse(BaseModel):
    status: str
    output_text: str
    steps_executed: int
    final_state: dict
    trace_watch: list[int]
    trace: list[dict]
    error: Optional[dict] = None


# Create FastAPI app
app = FastAPI(
    title="LC-3 Subset Simulator",
    description="Web API for executing LC-3 machine code with tracing",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/run", response_model=RunResponse)
async def run_code(request: RunRequest):
    """Execute a machine code program.

    Args:
        request: Program words (one per line) and execution options

    Returns:
        Execution result with output, trace, and final state
    """
    # Validate program size
    if len(request.program) > MAX_PROGRAM_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Program size exceeds limit of {MAX_PROGRAM_SIZE} bytes",
        )

    opts = request.options or RunOptionsModel()

    for addr in opts.trace_watch:
        if addr < 0 or addr >= MEMORY_SIZE:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid watch address: {addr}",
            )

    run_opts = RunOptions(
        max_steps=opts.max_steps,
        trace=opts.trace,
        trace_watch=list(opts.trace_watch),
        trace_include_registers=opts.trace_include_registers,
    )

    result = run_program(request.program, options=run_opts)
    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8080)
