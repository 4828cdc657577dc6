from . import citas_bp, datos_request
from ..auth import login_requerido
from ..models import TipoAtencionEnum
from ..schemas import CitaRequest
from ..services import citas as citas_service


@citas_bp.get("/")
@login_requerido
def list_citas(sesion):
    proximas = citas_service.citas_proximas(sesion.id_usuario)
    historial = citas_service.historial_citas(sesion.id_usuario)

    return {
        "ok": True,
        "proximas": [c.to_dict() for c in proximas],
        "historial": [c.to_dict() for c in historial],
        "tipos_atencion": [t.value for t in TipoAtencionEnum],
    }


@citas_bp.get("/todas")
@login_requerido
def todas_citas(sesion):
    citas = citas_service.todas_las_citas(sesion.id_usuario)
    return {"ok": True, "citas": [c.to_dict() for c in citas]}


@citas_bp.post("/")
@login_requerido
def crear_cita(sesion):
    datos = CitaRequest.desde_datos(datos_request())
    cita = citas_service.crear_cita(sesion.id_usuario, datos)
    return {"ok": True, "cita": cita.to_dict()}, 201


@citas_bp.post("/<int:id_cita>/estado")
@login_requerido
def actualizar_estado(sesion, id_cita):
    cita = citas_service.actualizar_estado_cita(
        sesion.id_usuario, id_cita, datos_request().get("estado")
    )
    return {"ok": True, "cita": cita.to_dict()}
