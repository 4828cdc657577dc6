from flask import current_app, session

from . import chatbot_bp, datos_request
from ..auth import login_requerido
from ..services.chatbot import Conversacion


def _conversacion():
    return Conversacion(
        mensajes=session.get("chatbot"),
        demora=current_app.config.get("CHATBOT_DELAY_SECONDS", 0),
    )


@chatbot_bp.get("/")
@login_requerido
def ver_chat(sesion):
    return {"ok": True, **_conversacion().to_dict()}


@chatbot_bp.post("/mensajes")
@login_requerido
def enviar_mensaje(sesion):
    conversacion = _conversacion()
    respuesta = conversacion.enviar(datos_request().get("texto"))
    session["chatbot"] = conversacion.mensajes

    return {"ok": True, "respuesta": respuesta, **conversacion.to_dict()}


@chatbot_bp.post("/reiniciar")
@login_requerido
def reiniciar_chat(sesion):
    session.pop("chatbot", None)
    return {"ok": True, **_conversacion().to_dict()}
