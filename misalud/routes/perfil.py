from flask import redirect, request, url_for

from . import perfil_bp, datos_request
from ..auth import login_requerido
from ..schemas import PerfilCompletoRequest, PerfilRequest
from ..services import perfil as perfil_service


# ---------------------------- COMPLETAR PERFIL ----------------------------
@perfil_bp.route("/complete-profile", methods=["GET", "POST"])
@login_requerido
def completar_perfil(sesion):
    if sesion.perfil_completo:
        return redirect(url_for("dashboard.dashboard"))

    if request.method == "GET":
        return {"ok": True, "perfil_completo": False}

    datos = PerfilRequest.desde_datos(datos_request())
    perfil = perfil_service.completar_perfil(sesion.id_usuario, datos)

    return {
        "ok": True,
        "perfil": perfil.to_dict(),
        "condiciones": perfil_service.condiciones_usuario(sesion.id_usuario),
        "alergias": perfil_service.alergias_usuario(sesion.id_usuario),
        "redirect": url_for("dashboard.dashboard"),
    }, 201


# ---------------------------- PERFIL ----------------------------
@perfil_bp.get("/profile")
@login_requerido
def ver_perfil(sesion):
    return {"ok": True, **perfil_service.perfil_completo_usuario(sesion.id_usuario)}


@perfil_bp.route("/profile", methods=["PUT", "POST"])
@login_requerido
def editar_perfil(sesion):
    """
    Actualiza nombre, datos del perfil y listas de condiciones y alergias.
    Las listas reemplazan por completo a las anteriores.
    """
    datos = PerfilCompletoRequest.desde_datos(datos_request())
    completo = perfil_service.actualizar_perfil_completo(sesion.id_usuario, datos)
    return {"ok": True, **completo}
