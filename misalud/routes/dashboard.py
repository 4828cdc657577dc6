from . import dashboard_bp
from ..auth import perfil_requerido
from ..models import db, Usuario
from ..services.perfil import alergias_usuario, condiciones_usuario, obtener_perfil
from ..services.salud import signos_para_mostrar


# ---------------------------- DASHBOARD ----------------------------
@dashboard_bp.get("/dashboard")
@perfil_requerido
def dashboard(sesion):
    usuario = db.session.get(Usuario, sesion.id_usuario)
    perfil = obtener_perfil(sesion.id_usuario)

    return {
        "ok": True,
        "usuario": {
            "id_usuario": usuario.id_usuario,
            "nombre_completo": usuario.nombre_completo,
            "inicial": usuario.nombre[:1].upper(),
        },
        "perfil": perfil.to_dict(),
        "signos_vitales": signos_para_mostrar(sesion.id_usuario),
        "condiciones": condiciones_usuario(sesion.id_usuario),
        "alergias": alergias_usuario(sesion.id_usuario),
    }
