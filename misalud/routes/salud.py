from flask import request

from . import salud_bp, datos_request
from ..auth import login_requerido
from ..exceptions import ValidacionError
from ..schemas import HistorialRequest, SignoVitalRequest
from ..services import salud as salud_service

LIMITE_MAXIMO = 100


@salud_bp.get("/")
@login_requerido
def salud_home(sesion):
    return {
        "ok": True,
        "signos_vitales": salud_service.signos_para_mostrar(sesion.id_usuario),
        "historial_medico": salud_service.resumen_historial(sesion.id_usuario),
    }


# ---------------------------- SIGNOS VITALES ----------------------------
@salud_bp.get("/signos")
@login_requerido
def historial_signos(sesion):
    limite = request.args.get("limite", 10, type=int)
    limite = max(1, min(limite, LIMITE_MAXIMO))

    signos = salud_service.historial_signos(sesion.id_usuario, limite)
    return {"ok": True, "signos": [s.to_dict() for s in signos]}


@salud_bp.post("/signos")
@login_requerido
def registrar_signos(sesion):
    datos = SignoVitalRequest.desde_datos(datos_request())
    signo = salud_service.registrar_signos(sesion.id_usuario, datos)
    return {"ok": True, "signo": signo.to_dict()}, 201


# ---------------------------- HISTORIAL MÉDICO ----------------------------
@salud_bp.get("/historial")
@login_requerido
def historial_medico(sesion):
    tipo = request.args.get("tipo")
    if tipo:
        entradas = salud_service.historial_por_tipo(sesion.id_usuario, tipo)
    else:
        entradas = salud_service.historial_completo(sesion.id_usuario)
    return {"ok": True, "historial": [h.to_dict() for h in entradas]}


@salud_bp.post("/historial")
@login_requerido
def registrar_historial(sesion):
    datos = HistorialRequest.desde_datos(datos_request())
    entrada = salud_service.registrar_historial(sesion.id_usuario, datos)
    return {"ok": True, "historial": entrada.to_dict()}, 201


# ---------------------------- ALERGIAS Y CONDICIONES ----------------------------
def _nombre_requerido():
    nombre = str(datos_request().get("nombre") or "").strip()
    if not nombre:
        raise ValidacionError("El campo 'nombre' es obligatorio.", field="nombre")
    return nombre


@salud_bp.post("/alergias")
@login_requerido
def agregar_alergia(sesion):
    alergias = salud_service.agregar_alergia(sesion.id_usuario, _nombre_requerido())
    return {"ok": True, "alergias": alergias}, 201


@salud_bp.post("/condiciones")
@login_requerido
def agregar_condicion(sesion):
    condiciones = salud_service.agregar_condicion(sesion.id_usuario, _nombre_requerido())
    return {"ok": True, "condiciones": condiciones}, 201
