from datetime import time

import pytest
from sqlalchemy.exc import IntegrityError

from misalud.models import Medicamento, MedicamentoDetalle
from misalud.schemas import MedicamentoRequest
from misalud.services import medicamentos as medicamentos_service


def _med(**cambios):
    datos = {
        "nombre": "Paracetamol 500mg",
        "tipo": "Analgésico",
        "frecuencia": "Cada 8 horas",
        "hora_primera_dosis": "14:00",
        "duracion": "7 días",
    }
    datos.update(cambios)
    return datos


def test_meds_redirige_a_login_si_no_hay_sesion(client):
    response = client.get("/medication/", follow_redirects=False)

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_meds_muestra_listado_si_hay_usuario_logueado(client_logueado):
    response = client_logueado.get("/medication/")

    assert response.status_code == 200
    data = response.get_json()
    assert data["activos"] == []
    assert "Antibiótico" in data["tipos"]


def test_crear_medicamento_calcula_dosis_restantes(client_logueado):
    response = client_logueado.post("/medication/", json=_med())

    assert response.status_code == 201
    med = response.get_json()["medicamento"]
    detalle = med["medicamento_detalle"][0]
    assert detalle["duracion_dias"] == 7
    assert detalle["dosis_restantes"] == 21
    assert detalle["estado"] == "activo"
    assert detalle["proxima_toma"] == "14:00"

    activos = client_logueado.get("/medication/").get_json()["activos"]
    assert [m["nombre"] for m in activos] == ["Paracetamol 500mg"]


def test_suspender_medicamento_lo_pasa_al_historial(client_logueado):
    med = client_logueado.post("/medication/", json=_med()).get_json()["medicamento"]

    response = client_logueado.post(f"/medication/{med['id_medicamento']}/estado", json={"estado": "suspendido"})
    assert response.status_code == 200

    data = client_logueado.get("/medication/").get_json()
    assert data["activos"] == []
    assert data["historial"][0]["medicamento_detalle"][0]["estado"] == "suspendido"


def test_crear_medicamento_rechaza_duracion_invalida(client_logueado):
    sin_numero = client_logueado.post("/medication/", json=_med(duracion="una semana"))
    cero = client_logueado.post("/medication/", json=_med(duracion=0))

    assert sin_numero.status_code == 400
    assert cero.status_code == 400
    assert sin_numero.get_json()["error"]["field"] == "duracion_dias"


def test_si_falla_el_detalle_no_queda_el_medicamento(app, id_usuario):
    datos = MedicamentoRequest(
        nombre="Amoxicilina 250mg",
        tipo="Antibiótico",
        frecuencia="Cada 12 horas",
        hora_primera_dosis=None,  # columna obligatoria en el detalle
        duracion_dias=10,
    )

    with app.app_context():
        with pytest.raises(IntegrityError):
            medicamentos_service.crear_medicamento(id_usuario, datos)

        assert Medicamento.query.count() == 0
        assert MedicamentoDetalle.query.count() == 0


def test_duracion_numerica_tambien_se_acepta(app, id_usuario):
    datos = MedicamentoRequest.desde_datos(_med(duracion=None, duracion_dias=5))

    with app.app_context():
        med = medicamentos_service.crear_medicamento(id_usuario, datos)
        detalle = med.detalles[0]

        assert detalle.dosis_restantes == 15
        assert detalle.hora_primera_dosis == time(14, 0)
