from misalud.services.chatbot import Conversacion, RESPUESTA, RESPUESTAS_RAPIDAS, SALUDO


def test_conversacion_empieza_con_saludo_y_respuestas_rapidas(client_logueado):
    data = client_logueado.get("/chatbot/").get_json()

    assert [m["texto"] for m in data["mensajes"]] == [SALUDO]
    assert data["mensajes"][0]["es_bot"] is True
    assert data["respuestas_rapidas"] == RESPUESTAS_RAPIDAS


def test_enviar_mensaje_recibe_respuesta_fija(client_logueado):
    response = client_logueado.post("/chatbot/mensajes", json={"texto": "Es una urgencia"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["respuesta"]["texto"] == RESPUESTA
    assert [m["id"] for m in data["mensajes"]] == [1, 2, 3]
    assert [m["es_bot"] for m in data["mensajes"]] == [True, False, True]
    # las respuestas rápidas desaparecen después del primer mensaje
    assert data["respuestas_rapidas"] == []

    # la conversación se mantiene en la sesión
    data = client_logueado.get("/chatbot/").get_json()
    assert len(data["mensajes"]) == 3


def test_mensaje_vacio_se_rechaza(client_logueado):
    response = client_logueado.post("/chatbot/mensajes", json={"texto": "   "})

    assert response.status_code == 400
    assert len(client_logueado.get("/chatbot/").get_json()["mensajes"]) == 1


def test_reiniciar_vuelve_al_saludo(client_logueado):
    client_logueado.post("/chatbot/mensajes", json={"texto": "Tengo un síntoma"})

    data = client_logueado.post("/chatbot/reiniciar").get_json()

    assert len(data["mensajes"]) == 1
    assert data["respuestas_rapidas"] == RESPUESTAS_RAPIDAS


def test_conversacion_espera_antes_de_responder(monkeypatch):
    esperas = []
    monkeypatch.setattr("misalud.services.chatbot.time.sleep", esperas.append)

    conversacion = Conversacion(demora=1.0)
    conversacion.enviar("Hola")

    assert esperas == [1.0]
    assert conversacion.mensajes[-1]["texto"] == RESPUESTA
