import logging

from . import confirmar
from ..exceptions import NoEncontradoError, ValidacionError
from ..models import db, Cita, ESTADO_CITA_PENDIENTE

logger = logging.getLogger(__name__)

DOCTOR_POR_DEFECTO = "Dr. Asignado"


def crear_cita(id_usuario, datos):
    # No se validan choques de horario: se permite agendar dos citas a la misma hora.
    cita = Cita(
        id_usuario=id_usuario,
        fecha=datos.fecha,
        hora=datos.hora,
        especialidad=datos.especialidad,
        motivo=datos.motivo,
        tipo_atencion=datos.tipo_atencion,
        ubicacion=datos.ubicacion,
        doctor=datos.doctor or DOCTOR_POR_DEFECTO,
        estado=ESTADO_CITA_PENDIENTE,
        notas=datos.notas,
    )
    db.session.add(cita)
    confirmar("crear la cita")

    logger.info("Cita %s creada para usuario %s (%s %s)", cita.id_cita, id_usuario, cita.fecha, cita.hora)
    return cita


def citas_proximas(id_usuario):
    return (
        Cita.query
        .filter(Cita.id_usuario == id_usuario, Cita.estado == ESTADO_CITA_PENDIENTE)
        .order_by(Cita.fecha.asc(), Cita.hora.asc())
        .all()
    )


def historial_citas(id_usuario):
    return (
        Cita.query
        .filter(Cita.id_usuario == id_usuario, Cita.estado != ESTADO_CITA_PENDIENTE)
        .order_by(Cita.fecha.desc())
        .all()
    )


def todas_las_citas(id_usuario):
    return (
        Cita.query
        .filter_by(id_usuario=id_usuario)
        .order_by(Cita.fecha.desc())
        .all()
    )


def actualizar_estado_cita(id_usuario, id_cita, estado):
    estado = (estado or "").strip()
    if not estado:
        raise ValidacionError("El campo 'estado' es obligatorio.", field="estado")

    cita = Cita.query.filter_by(id_cita=id_cita, id_usuario=id_usuario).first()
    if not cita:
        raise NoEncontradoError("La cita no existe o no te pertenece.")

    cita.estado = estado
    confirmar("actualizar el estado de la cita")

    logger.info("Cita %s pasó a estado %s", id_cita, estado)
    return cita
