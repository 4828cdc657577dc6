import logging

from sqlalchemy.exc import SQLAlchemyError

from ..models import db

logger = logging.getLogger(__name__)


def confirmar(accion):
    """Hace commit de la sesión; si falla, rollback y se propaga el error."""
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error al %s", accion)
        raise
