from flask import redirect, request, url_for

from . import auth_bp, datos_request
from ..auth import cargar_sesion, cerrar_sesion, iniciar_sesion, siguiente_pantalla
from ..schemas import LoginRequest, RegistroRequest
from ..services.usuarios import autenticar, registrar_usuario


# ---------------------------- ROOT REDIRECT ----------------------------
@auth_bp.route("/")
def root():
    sesion = cargar_sesion()
    if sesion is None:
        return redirect(url_for("auth.login"))
    return redirect(siguiente_pantalla(sesion))


# ---------------------------- REGISTER ----------------------------
@auth_bp.post("/register")
def register():
    registro = RegistroRequest.desde_datos(datos_request())
    usuario = registrar_usuario(registro)

    # recién registrado: todavía no tiene perfil
    sesion = iniciar_sesion(usuario)
    return {
        "ok": True,
        "id_usuario": usuario.id_usuario,
        "redirect": siguiente_pantalla(sesion),
    }, 201


# ---------------------------- LOGIN ----------------------------
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        sesion = cargar_sesion()
        if sesion is not None:
            return redirect(siguiente_pantalla(sesion))
        return {"ok": True, "autenticado": False}

    datos = LoginRequest.desde_datos(datos_request())
    usuario = autenticar(datos.username, datos.password)
    sesion = iniciar_sesion(usuario)

    return {
        "ok": True,
        "id_usuario": sesion.id_usuario,
        "perfil_completo": sesion.perfil_completo,
        "redirect": siguiente_pantalla(sesion),
    }


# ---------------------------- LOGOUT ----------------------------
@auth_bp.route("/logout", methods=["GET", "POST"])
def logout():
    cerrar_sesion()
    return redirect(url_for("auth.login"))
