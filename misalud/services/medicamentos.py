import logging

from . import confirmar
from ..exceptions import NoEncontradoError, ValidacionError
from ..models import db, Medicamento, MedicamentoDetalle, ESTADO_MEDICAMENTO_ACTIVO

logger = logging.getLogger(__name__)

# Estimación: 3 dosis por día de tratamiento
DOSIS_POR_DIA = 3


def crear_medicamento(id_usuario, datos):
    """
    Crea el medicamento y su detalle en la misma transacción.
    Si falla el detalle no queda el medicamento suelto.
    """
    # --------- Crear medicamento ---------
    med = Medicamento(
        id_usuario=id_usuario,
        nombre=datos.nombre,
        tipo=datos.tipo,
    )
    db.session.add(med)
    db.session.flush()

    # --------- Crear detalle ---------
    detalle = MedicamentoDetalle(
        id_medicamento=med.id_medicamento,
        frecuencia=datos.frecuencia,
        hora_primera_dosis=datos.hora_primera_dosis,
        duracion_dias=datos.duracion_dias,
        estado=ESTADO_MEDICAMENTO_ACTIVO,
        proxima_toma=datos.hora_primera_dosis,
        dosis_restantes=datos.duracion_dias * DOSIS_POR_DIA,
    )
    db.session.add(detalle)
    confirmar("crear el medicamento")

    logger.info("Medicamento %s (%s) creado para usuario %s", med.id_medicamento, med.nombre, id_usuario)
    return med


def medicamentos_activos(id_usuario):
    return (
        Medicamento.query
        .join(MedicamentoDetalle, MedicamentoDetalle.id_medicamento == Medicamento.id_medicamento)
        .filter(
            Medicamento.id_usuario == id_usuario,
            MedicamentoDetalle.estado == ESTADO_MEDICAMENTO_ACTIVO,
        )
        .order_by(Medicamento.nombre.asc())
        .distinct()
        .all()
    )


def historial_medicamentos(id_usuario):
    return (
        Medicamento.query
        .join(MedicamentoDetalle, MedicamentoDetalle.id_medicamento == Medicamento.id_medicamento)
        .filter(
            Medicamento.id_usuario == id_usuario,
            MedicamentoDetalle.estado != ESTADO_MEDICAMENTO_ACTIVO,
        )
        .order_by(Medicamento.nombre.asc())
        .distinct()
        .all()
    )


def todos_los_medicamentos(id_usuario):
    return (
        Medicamento.query
        .filter_by(id_usuario=id_usuario)
        .order_by(Medicamento.nombre.asc())
        .all()
    )


def actualizar_estado_medicamento(id_usuario, id_medicamento, estado):
    estado = (estado or "").strip()
    if not estado:
        raise ValidacionError("El campo 'estado' es obligatorio.", field="estado")

    med = Medicamento.query.filter_by(id_medicamento=id_medicamento, id_usuario=id_usuario).first()
    if not med:
        raise NoEncontradoError("El medicamento no existe o no te pertenece.")

    for detalle in med.detalles:
        detalle.estado = estado
    confirmar("actualizar el estado del medicamento")

    logger.info("Medicamento %s pasó a estado %s", id_medicamento, estado)
    return med
