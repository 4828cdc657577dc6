from . import medicamentos_bp, datos_request
from ..auth import login_requerido
from ..models import TipoMedicamentoEnum
from ..schemas import MedicamentoRequest
from ..services import medicamentos as medicamentos_service


@medicamentos_bp.get("/")
@login_requerido
def list_meds(sesion):
    activos = medicamentos_service.medicamentos_activos(sesion.id_usuario)
    historial = medicamentos_service.historial_medicamentos(sesion.id_usuario)

    return {
        "ok": True,
        "activos": [m.to_dict() for m in activos],
        "historial": [m.to_dict() for m in historial],
        "tipos": [t.value for t in TipoMedicamentoEnum],
    }


@medicamentos_bp.get("/todos")
@login_requerido
def todos_meds(sesion):
    meds = medicamentos_service.todos_los_medicamentos(sesion.id_usuario)
    return {"ok": True, "medicamentos": [m.to_dict() for m in meds]}


@medicamentos_bp.post("/")
@login_requerido
def crear_med(sesion):
    datos = MedicamentoRequest.desde_datos(datos_request())
    med = medicamentos_service.crear_medicamento(sesion.id_usuario, datos)

    # las notificaciones no se guardan, solo se devuelven al cliente
    return {"ok": True, "medicamento": med.to_dict(), "notificaciones": datos.notificaciones}, 201


@medicamentos_bp.post("/<int:id_medicamento>/estado")
@login_requerido
def actualizar_estado(sesion, id_medicamento):
    med = medicamentos_service.actualizar_estado_medicamento(
        sesion.id_usuario, id_medicamento, datos_request().get("estado")
    )
    return {"ok": True, "medicamento": med.to_dict()}
