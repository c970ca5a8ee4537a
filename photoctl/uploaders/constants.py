"""Shared constants for uploader modules.

These defaults are conservative for broad compatibility. For fast links and
a store that tags quickly, consider raising workers via --workers.
"""

from photoctl.core.config import DEFAULT_WORKERS

# =============================================================================
# Scheduler
# =============================================================================

# Concurrent items in flight per batch run, shared with the profile default
DEFAULT_UPLOAD_WORKERS = DEFAULT_WORKERS

# =============================================================================
# Encoder
# =============================================================================

# Bytes read per chunk; must stay a multiple of 3 so the base64 of each
# chunk concatenates without padding in the middle.
CHUNK_SIZE = 3 * 0x8000

# =============================================================================
# Transport
# =============================================================================

# Store endpoint accepting {file_name, image_base64, mime_type}
UPLOAD_PATH = "/api/images"

# Bytes handed to the HTTP channel per progress update
SEND_CHUNK_SIZE = 64 * 1024
