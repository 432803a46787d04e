
import json
import logging
import uuid
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

def log_payload(direction: str, payload: dict):
    # direction in {'in','out'}
    rec = {
        "log_id": str(uuid.uuid4()),
        "direction": direction,
        "payload": payload,
        "created_at": datetime.now(timezone.utc).isoformat()
    }
    logger.info(json.dumps(rec, ensure_ascii=False, default=str))
