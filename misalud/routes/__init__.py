from flask import Blueprint, request

from ..exceptions import ValidacionError

auth_bp = Blueprint("auth", __name__)
perfil_bp = Blueprint("perfil", __name__)
dashboard_bp = Blueprint("dashboard", __name__)
citas_bp = Blueprint("citas", __name__, url_prefix="/appointments")
medicamentos_bp = Blueprint("medicamentos", __name__, url_prefix="/medication")
salud_bp = Blueprint("salud", __name__, url_prefix="/health")
chatbot_bp = Blueprint("chatbot", __name__, url_prefix="/chatbot")


def datos_request():
    """Body JSON si lo hay; si no, los campos del formulario."""
    datos = request.get_json(silent=True)
    if datos is None:
        return request.form
    if not isinstance(datos, dict):
        raise ValidacionError("El cuerpo debe ser un objeto JSON.")
    return datos


from . import auth, perfil, dashboard, citas, medicamentos, salud, chatbot
