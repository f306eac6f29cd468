# Validation (1000-1999)
MISSING_MEDIA_PARAMETERS = 1001
MISSING_MEDIA_URL = 1002
INVALID_REQUEST_PAYLOAD = 1003

# External Service (5000-5999)
UPSTREAM_REQUEST_FAILED = 5001
UPSTREAM_UNREACHABLE = 5002
MEDIA_URL_NOT_FOUND = 5003
UPSTREAM_RESPONSE_NOT_JSON = 5004
MEDIA_DOWNLOAD_FAILED = 5005

# Configuration (7000-7999)
ACCESS_KEY_NOT_CONFIGURED = 7001

# Internal (8000-8999)
UNEXPECTED_ERROR = 8001
