import logging
from sqlalchemy.orm import Session
from database import session_scope
from models.log import Log

logger = logging.getLogger(__name__)

def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", ip=None, meta=None):
    entry = Log(user_id=user_id, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()
    logger.info("%s %s %s user=%s meta=%s", resource, action, status, user_id, meta or {})

# Same as write_log, for callers that hold no request session (bulk workers)
def write_log_detached(**kwargs):
    with session_scope() as db:
        write_log(db, **kwargs)
