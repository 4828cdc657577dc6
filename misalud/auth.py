from dataclasses import dataclass
from functools import wraps

from flask import redirect, session, url_for

from .models import db, Usuario


@dataclass
class Sesion:
    """Sesión explícita del usuario logueado; vive desde el login hasta el logout."""

    id_usuario: int
    perfil_completo: bool


def cargar_sesion():
    user_id = session.get("user_id")
    if not user_id:
        return None

    usuario = db.session.get(Usuario, user_id)
    if usuario is None:
        # el usuario fue eliminado, la cookie quedó vieja
        session.clear()
        return None

    return Sesion(id_usuario=user_id, perfil_completo=usuario.perfil is not None)


def iniciar_sesion(usuario):
    session.clear()
    session["user_id"] = usuario.id_usuario
    return cargar_sesion()


def cerrar_sesion():
    session.clear()


def siguiente_pantalla(sesion):
    if sesion.perfil_completo:
        return url_for("dashboard.dashboard")
    return url_for("perfil.completar_perfil")


def login_requerido(f):
    """Decorator para rutas protegidas: sin sesión redirige a /login."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        sesion = cargar_sesion()
        if sesion is None:
            return redirect(url_for("auth.login"))
        return f(sesion, *args, **kwargs)
    return wrapper


def perfil_requerido(f):
    """Como login_requerido, pero además exige el perfil completo."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        sesion = cargar_sesion()
        if sesion is None:
            return redirect(url_for("auth.login"))
        if not sesion.perfil_completo:
            return redirect(url_for("perfil.completar_perfil"))
        return f(sesion, *args, **kwargs)
    return wrapper
