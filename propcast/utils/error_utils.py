"""
Error handling utilities for PropCast.

This module provides centralized error handling and logging for the projection
engine and its HTTP surface. It includes the base exception class and the
decorator used on public engine functions for consistent error reporting.
"""

import os
import traceback
import logging
from functools import wraps
import sys
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

# Configure logging; no file handler on serverless (read-only filesystem)
_handlers = [logging.StreamHandler(sys.stdout)]
if not os.getenv("VERCEL"):
    _handlers.append(logging.FileHandler(os.getenv("PROPCAST_LOG_FILE", "propcast.log")))

logging.basicConfig(
    level=os.getenv("PROPCAST_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=_handlers,
)

logger = logging.getLogger("propcast")


class PropcastError(Exception):
    """Base exception class for PropCast errors"""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details
        self.timestamp = datetime.now()
        super().__init__(self.message)


def error_handler(func):
    """Decorator for handling errors and providing detailed information"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PropcastError:
            # Already wrapped further down the call chain
            raise
        except Exception as e:
            exc_type, exc_value, exc_tb = sys.exc_info()
            tb = traceback.extract_tb(exc_tb)

            error_location = f"{tb[-1].filename}:{tb[-1].lineno}"
            error_function = tb[-1].name

            error_details = {
                "error_type": exc_type.__name__,
                "location": error_location,
                "function": error_function,
                "arguments": {"args": str(args), "kwargs": str(kwargs)},
                "traceback": traceback.format_exc(),
            }

            logger.error(f"Error in {error_location} - {error_function}: {str(e)}")
            logger.debug(f"Detailed error information: {error_details}")

            raise PropcastError(
                f"Error in {error_function} at {error_location}: {str(e)}",
                error_details,
            ) from e

    return wrapper


# Module metadata
__version__ = "1.0.0"
__author__ = "PropCast Development Team"
__description__ = "Error handling utilities for PropCast"
