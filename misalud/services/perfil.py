"""
Servicio de perfil: datos antropométricos del paciente y sus condiciones
médicas y alergias.

Las condiciones y alergias viven en tablas de catálogo (nombre único) y se
vinculan al usuario con tablas intermedias. Guardar una lista reemplaza
todos los vínculos anteriores: se borran y se vuelven a crear a partir de
los nombres recibidos.
"""
import logging

from . import confirmar
from ..exceptions import ConflictoError, NoEncontradoError
from ..models import (
    db,
    Usuario,
    PerfilUsuario,
    CondicionMedica,
    Alergia,
    UsuarioCondicion,
    UsuarioAlergia,
)

logger = logging.getLogger(__name__)

CAMPOS_PERFIL = ("edad", "talla_cm", "peso_kg", "tipo_paciente")


def _normalizar_nombres(nombres):
    vistos = []
    for nombre in nombres or []:
        nombre = (nombre or "").strip()
        if nombre and nombre not in vistos:
            vistos.append(nombre)
    return vistos


def _obtener_usuario(id_usuario):
    usuario = db.session.get(Usuario, id_usuario)
    if usuario is None:
        raise NoEncontradoError("El usuario no existe.")
    return usuario


# ---------------------------- PERFIL ----------------------------

def obtener_perfil(id_usuario):
    return PerfilUsuario.query.filter_by(id_usuario=id_usuario).first()


def crear_perfil(id_usuario, datos, commit=True):
    _obtener_usuario(id_usuario)
    if obtener_perfil(id_usuario):
        raise ConflictoError("El perfil ya fue completado.")

    perfil = PerfilUsuario(
        id_usuario=id_usuario,
        edad=datos.edad,
        talla_cm=datos.talla_cm,
        peso_kg=datos.peso_kg,
        tipo_paciente=datos.tipo_paciente,
    )
    db.session.add(perfil)
    if commit:
        confirmar("crear el perfil")
    return perfil


def actualizar_perfil(id_usuario, commit=True, **cambios):
    perfil = obtener_perfil(id_usuario)
    if perfil is None:
        raise NoEncontradoError("El usuario todavía no completó su perfil.")

    for campo, valor in cambios.items():
        if campo in CAMPOS_PERFIL:
            setattr(perfil, campo, valor)
    if commit:
        confirmar("actualizar el perfil")
    return perfil


def actualizar_datos_usuario(id_usuario, nombre, apellido_paterno, apellido_materno, commit=True):
    usuario = _obtener_usuario(id_usuario)
    usuario.nombre = nombre
    usuario.apellido_paterno = apellido_paterno
    usuario.apellido_materno = apellido_materno
    if commit:
        confirmar("actualizar los datos del usuario")
    return usuario


# ---------------------------- CATÁLOGOS ----------------------------

def _obtener_o_crear(modelo, nombre):
    nombre = nombre.strip()
    registro = modelo.query.filter_by(nombre=nombre).first()
    if registro is None:
        registro = modelo(nombre=nombre)
        db.session.add(registro)
        db.session.flush()  # para obtener el id antes del commit
        logger.info("Nuevo registro en %s: %s", modelo.__tablename__, nombre)
    return registro


def obtener_o_crear_condicion(nombre):
    return _obtener_o_crear(CondicionMedica, nombre)


def obtener_o_crear_alergia(nombre):
    return _obtener_o_crear(Alergia, nombre)


# ---------------------------- SINCRONIZACIÓN ----------------------------

def sincronizar_condiciones(id_usuario, nombres, commit=True):
    """
    Reemplaza las condiciones del usuario por exactamente ``nombres``.
    Una lista vacía deja al usuario sin condiciones.
    """
    UsuarioCondicion.query.filter_by(id_usuario=id_usuario).delete()

    for nombre in _normalizar_nombres(nombres):
        condicion = obtener_o_crear_condicion(nombre)
        db.session.add(UsuarioCondicion(id_usuario=id_usuario, id_condicion=condicion.id_condicion))

    if commit:
        confirmar("sincronizar condiciones")
    return condiciones_usuario(id_usuario)


def sincronizar_alergias(id_usuario, nombres, commit=True):
    """
    Reemplaza las alergias del usuario por exactamente ``nombres``.
    Una lista vacía deja al usuario sin alergias.
    """
    UsuarioAlergia.query.filter_by(id_usuario=id_usuario).delete()

    for nombre in _normalizar_nombres(nombres):
        alergia = obtener_o_crear_alergia(nombre)
        db.session.add(UsuarioAlergia(id_usuario=id_usuario, id_alergia=alergia.id_alergia))

    if commit:
        confirmar("sincronizar alergias")
    return alergias_usuario(id_usuario)


def condiciones_usuario(id_usuario):
    rows = (
        db.session.query(CondicionMedica.nombre)
        .join(UsuarioCondicion, UsuarioCondicion.id_condicion == CondicionMedica.id_condicion)
        .filter(UsuarioCondicion.id_usuario == id_usuario)
        .order_by(CondicionMedica.nombre.asc())
        .all()
    )
    return [nombre for (nombre,) in rows]


def alergias_usuario(id_usuario):
    rows = (
        db.session.query(Alergia.nombre)
        .join(UsuarioAlergia, UsuarioAlergia.id_alergia == Alergia.id_alergia)
        .filter(UsuarioAlergia.id_usuario == id_usuario)
        .order_by(Alergia.nombre.asc())
        .all()
    )
    return [nombre for (nombre,) in rows]


# ---------------------------- PERFIL COMPLETO ----------------------------

def completar_perfil(id_usuario, datos):
    """Paso posterior al registro: crea el perfil y guarda condiciones y alergias."""
    perfil = crear_perfil(id_usuario, datos, commit=False)
    sincronizar_condiciones(id_usuario, datos.condiciones, commit=False)
    sincronizar_alergias(id_usuario, datos.alergias, commit=False)
    confirmar("completar el perfil")

    logger.info("Perfil completado para usuario %s", id_usuario)
    return perfil


def perfil_completo_usuario(id_usuario):
    usuario = _obtener_usuario(id_usuario)
    perfil = obtener_perfil(id_usuario)
    return {
        "usuario": usuario.to_dict(),
        "perfil": perfil.to_dict() if perfil else None,
        "condiciones": condiciones_usuario(id_usuario),
        "alergias": alergias_usuario(id_usuario),
    }


def actualizar_perfil_completo(id_usuario, datos):
    actualizar_datos_usuario(
        id_usuario,
        datos.nombre,
        datos.apellido_paterno,
        datos.apellido_materno,
        commit=False,
    )
    actualizar_perfil(
        id_usuario,
        commit=False,
        **{campo: getattr(datos.perfil, campo) for campo in CAMPOS_PERFIL},
    )
    sincronizar_condiciones(id_usuario, datos.perfil.condiciones, commit=False)
    sincronizar_alergias(id_usuario, datos.perfil.alergias, commit=False)
    confirmar("actualizar el perfil completo")

    logger.info("Perfil actualizado para usuario %s", id_usuario)
    return perfil_completo_usuario(id_usuario)
