"""
事务边界：一次组合写入一个事务
全部写入成功才提交，任何异常都回滚后继续上抛
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hotelhub.errors import CompositionError, StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, action: str):
    try:
        yield
        db.commit()
    except CompositionError as exc:
        db.rollback()
        logger.warning("%s 失败，已回滚: %s", action, exc.message)
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("%s 提交失败，已回滚: %s", action, exc)
        raise StorageFailure(action, str(exc)) from exc
    except Exception:
        db.rollback()
        logger.exception("%s 出现未预期错误，已回滚", action)
        raise
