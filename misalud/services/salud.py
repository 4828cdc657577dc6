import logging

from . import confirmar
from .perfil import (
    alergias_usuario,
    condiciones_usuario,
    obtener_o_crear_alergia,
    obtener_o_crear_condicion,
)
from ..models import (
    db,
    SignoVital,
    HistorialMedico,
    UsuarioAlergia,
    UsuarioCondicion,
)

logger = logging.getLogger(__name__)

HISTORIAL_CIRUGIA = "cirugia"
HISTORIAL_VACUNA = "vacuna"

# Valores que se muestran cuando el usuario todavía no registró signos vitales.
# Salen de la pantalla de salud (36.8°C, 8,240 pasos, 7 H 32 MIN, 1,420 kcal);
# las horas de sueño van redondeadas a un decimal como la columna horas_sueno.
# La presión 120/80 es la lectura normal de referencia: la pantalla original
# mostraba frecuencia cardíaca, que no tiene columna en signos_vitales.
SIGNOS_POR_DEFECTO = {
    "presion_arterial": "120/80",
    "temperatura": 36.8,
    "pasos": 8240,
    "horas_sueno": 7.5,
    "calorias_quemadas": 1420,
}


# ---------------------------- SIGNOS VITALES ----------------------------

def ultimos_signos(id_usuario):
    return (
        SignoVital.query
        .filter_by(id_usuario=id_usuario)
        .order_by(SignoVital.fecha_hora.desc(), SignoVital.id_signo.desc())
        .first()
    )


def historial_signos(id_usuario, limite=10):
    return (
        SignoVital.query
        .filter_by(id_usuario=id_usuario)
        .order_by(SignoVital.fecha_hora.desc(), SignoVital.id_signo.desc())
        .limit(limite)
        .all()
    )


def todos_los_signos(id_usuario):
    return (
        SignoVital.query
        .filter_by(id_usuario=id_usuario)
        .order_by(SignoVital.fecha_hora.desc(), SignoVital.id_signo.desc())
        .all()
    )


def registrar_signos(id_usuario, datos):
    signo = SignoVital(
        id_usuario=id_usuario,
        presion_arterial=datos.presion_arterial,
        temperatura=datos.temperatura,
        pasos=datos.pasos,
        horas_sueno=datos.horas_sueno,
        calorias_quemadas=datos.calorias_quemadas,
    )
    db.session.add(signo)
    confirmar("registrar signos vitales")

    logger.info("Signos vitales %s registrados para usuario %s", signo.id_signo, id_usuario)
    return signo


def signos_para_mostrar(id_usuario):
    """
    Devuelve los últimos signos vitales listos para el dashboard.
    Sin registros se muestran los valores por defecto, marcados con
    ``sin_registros`` para que el cliente pueda distinguirlos.
    """
    signo = ultimos_signos(id_usuario)
    if signo is None:
        return dict(SIGNOS_POR_DEFECTO, fecha_hora=None, sin_registros=True)

    datos = signo.to_dict()
    datos["sin_registros"] = False
    return datos


# ---------------------------- HISTORIAL MÉDICO ----------------------------

def historial_por_tipo(id_usuario, tipo):
    return (
        HistorialMedico.query
        .filter_by(id_usuario=id_usuario, tipo_historial=tipo)
        .order_by(HistorialMedico.id_historial.asc())
        .all()
    )


def historial_completo(id_usuario):
    return (
        HistorialMedico.query
        .filter_by(id_usuario=id_usuario)
        .order_by(HistorialMedico.id_historial.desc())
        .all()
    )


def registrar_historial(id_usuario, datos):
    entrada = HistorialMedico(
        id_usuario=id_usuario,
        tipo_historial=datos.tipo_historial,
        descripcion=datos.descripcion,
    )
    db.session.add(entrada)
    confirmar("registrar historial médico")

    logger.info("Historial %s (%s) registrado para usuario %s", entrada.id_historial, entrada.tipo_historial, id_usuario)
    return entrada


def resumen_historial(id_usuario):
    """Historial médico agrupado como lo muestra la pantalla de salud."""
    return {
        "alergias": alergias_usuario(id_usuario),
        "enfermedades_cronicas": condiciones_usuario(id_usuario),
        "intervenciones_quirurgicas": [h.descripcion for h in historial_por_tipo(id_usuario, HISTORIAL_CIRUGIA)],
        "vacunas_aplicadas": [h.descripcion for h in historial_por_tipo(id_usuario, HISTORIAL_VACUNA)],
    }


# ---------------------------- ALERGIAS Y CONDICIONES ----------------------------

def agregar_alergia(id_usuario, nombre):
    """Agrega una alergia sin tocar las demás; si ya estaba vinculada no hace nada."""
    alergia = obtener_o_crear_alergia(nombre)
    existe = UsuarioAlergia.query.filter_by(id_usuario=id_usuario, id_alergia=alergia.id_alergia).first()
    if not existe:
        db.session.add(UsuarioAlergia(id_usuario=id_usuario, id_alergia=alergia.id_alergia))
    confirmar("agregar la alergia")
    return alergias_usuario(id_usuario)


def agregar_condicion(id_usuario, nombre):
    """Agrega una condición médica sin tocar las demás; si ya estaba vinculada no hace nada."""
    condicion = obtener_o_crear_condicion(nombre)
    existe = UsuarioCondicion.query.filter_by(id_usuario=id_usuario, id_condicion=condicion.id_condicion).first()
    if not existe:
        db.session.add(UsuarioCondicion(id_usuario=id_usuario, id_condicion=condicion.id_condicion))
    confirmar("agregar la condición")
    return condiciones_usuario(id_usuario)
