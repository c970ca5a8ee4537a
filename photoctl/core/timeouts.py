"""HTTP timeout defaults shared by the client and the upload transport."""

# Read endpoints (gallery listing, search)
DEFAULT_HTTP_TIMEOUT_SECONDS = 30

# A single image upload; this is the only bound on a stuck item
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 300
