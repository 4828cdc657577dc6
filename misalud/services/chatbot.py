import logging
import time
from datetime import datetime

from ..exceptions import ValidacionError

logger = logging.getLogger(__name__)

SALUDO = "¿Te puedo ayudar en algo?"
RESPUESTA = "Entiendo tu preocupación. ¿Podrías contarme más detalles sobre lo que sientes?"

RESPUESTAS_RAPIDAS = [
    "Tengo un síntoma",
    "Es una urgencia",
    "Me siento mal emocionalmente",
    "No sé cómo describirlo",
]


def _mensaje(id_mensaje, texto, es_bot):
    return {
        "id": id_mensaje,
        "texto": texto,
        "es_bot": es_bot,
        "hora": datetime.now().strftime("%H:%M"),
    }


class Conversacion:
    """
    Conversación con MediBot: una lista plana de mensajes.
    El bot contesta siempre lo mismo después de una pausa.
    """

    def __init__(self, mensajes=None, demora=1.0):
        self.mensajes = list(mensajes) if mensajes else [_mensaje(1, SALUDO, True)]
        self.demora = demora

    @property
    def respuestas_rapidas(self):
        # solo se ofrecen mientras la conversación tiene únicamente el saludo
        if len(self.mensajes) == 1:
            return list(RESPUESTAS_RAPIDAS)
        return []

    def enviar(self, texto):
        texto = (texto or "").strip()
        if not texto:
            raise ValidacionError("El mensaje no puede estar vacío.", field="texto")

        self.mensajes.append(_mensaje(len(self.mensajes) + 1, texto, False))

        if self.demora:
            time.sleep(self.demora)

        respuesta = _mensaje(len(self.mensajes) + 1, RESPUESTA, True)
        self.mensajes.append(respuesta)
        logger.debug("Chatbot respondió al mensaje %s", respuesta["id"] - 1)
        return respuesta

    def to_dict(self):
        return {
            "mensajes": self.mensajes,
            "respuestas_rapidas": self.respuestas_rapidas,
        }
