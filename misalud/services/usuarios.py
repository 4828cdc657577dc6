import logging

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from ..exceptions import ConflictoError, CredencialesInvalidasError
from ..models import db, Usuario

logger = logging.getLogger(__name__)

# hash fijo para que un usuario inexistente cueste lo mismo que una contraseña incorrecta
_HASH_SIN_USUARIO = generate_password_hash("misalud-sin-usuario")


def registrar_usuario(registro):
    if Usuario.query.filter_by(username=registro.username).first():
        raise ConflictoError("Ese usuario ya está registrado.", field="username")

    nuevo = Usuario(
        nombre=registro.nombre,
        apellido_paterno=registro.apellido_paterno,
        apellido_materno=registro.apellido_materno,
        username=registro.username,
    )
    nuevo.set_password(registro.password)

    try:
        db.session.add(nuevo)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error al registrar usuario %s", registro.username)
        raise

    logger.info("Usuario registrado: %s (id=%s)", nuevo.username, nuevo.id_usuario)
    return nuevo


def autenticar(username, password):
    """
    Verifica usuario y contraseña contra la tabla usuarios.
    Devuelve el Usuario; cualquier fallo lanza el mismo CredencialesInvalidasError.
    """
    if not isinstance(username, str) or not isinstance(password, str):
        check_password_hash(_HASH_SIN_USUARIO, "")
        logger.warning("Login rechazado para %r", username)
        raise CredencialesInvalidasError()

    usuario = Usuario.query.filter_by(username=username.strip()).first()

    if usuario is None:
        check_password_hash(_HASH_SIN_USUARIO, password)
        logger.warning("Login rechazado para %r", username)
        raise CredencialesInvalidasError()

    if not usuario.check_password(password):
        logger.warning("Login rechazado para %r", username)
        raise CredencialesInvalidasError()

    return usuario
