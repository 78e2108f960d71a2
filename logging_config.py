import logging
import os
import sys
from pprint import pformat

# Configure logging
def setup_logging():
    # Create logger
    logger = logging.getLogger("pantry_api")
    logger.setLevel(os.getenv("LOG_LEVEL", "DEBUG").upper())

    # Avoid duplicate handlers when the module is reloaded
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)

        # Create formatter
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(formatter)

        # Add handler to logger
        logger.addHandler(console_handler)

    return logger

# Get the logger
logger = setup_logging()

def log_request_info(request, message="Request received"):
    """Log detailed request information"""
    logger.info(f"{message}: {request.method} {request.url}")
    logger.debug(f"Request headers: {pformat(dict(request.headers))}")
    if request.method in ['POST', 'PUT', 'PATCH']:
        logger.debug(f"Request content type: {request.headers.get('content-type')}")

def log_response_info(response, message="Response sent"):
    """Log detailed response information"""
    logger.info(f"{message}: Status {response.status_code}")
    logger.debug(f"Response headers: {pformat(dict(response.headers))}")
