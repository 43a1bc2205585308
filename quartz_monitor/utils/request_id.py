import uuid

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    """
    Generate a unique request ID

    Returns:
        str: A unique request ID in UUID4 format
    """
    return str(uuid.uuid4())

