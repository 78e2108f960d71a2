import asyncio
import os
from typing import Awaitable, TypeVar

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from errors import RemoteOperationError, RemoteTimeoutError
from logging_config import logger

load_dotenv()

# Upper bound, in seconds, for any single document store or blob store call
REMOTE_CALL_TIMEOUT = float(os.getenv("REMOTE_CALL_TIMEOUT", "10"))

T = TypeVar("T")

async def call_remote(awaitable: Awaitable[T], operation: str, timeout: float = None) -> T:
    """
    Await a remote call with a timeout and typed failures.

    Args:
        awaitable: The coroutine performing the call
        operation: Short description used in logs and error messages
        timeout: Seconds to wait; defaults to REMOTE_CALL_TIMEOUT

    Returns:
        Whatever the awaitable returns

    Raises:
        RemoteTimeoutError: The call did not finish in time
        RemoteOperationError: The store reported a failure
    """
    if timeout is None:
        timeout = REMOTE_CALL_TIMEOUT
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Remote call timed out after {timeout}s: {operation}")
        raise RemoteTimeoutError(f"{operation} timed out after {timeout} seconds")
    except (PyMongoError, OSError) as e:
        logger.error(f"Remote call failed: {operation}: {str(e)}")
        raise RemoteOperationError(f"{operation} failed: {str(e)}") from e
