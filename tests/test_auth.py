from misalud.models import db, Usuario


def _registro(**cambios):
    datos = {
        "nombre": "Luis",
        "apellido_paterno": "Pérez",
        "apellido_materno": "Gómez",
        "username": "luis",
        "password": "secreta",
    }
    datos.update(cambios)
    return datos


def test_raiz_redirige_a_login_si_no_hay_sesion(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]


def test_rutas_protegidas_redirigen_a_login(client):
    for ruta in ("/dashboard", "/complete-profile", "/profile", "/appointments/",
                 "/medication/", "/health/", "/chatbot/"):
        response = client.get(ruta, follow_redirects=False)

        assert response.status_code == 302, ruta
        assert "/login" in response.headers["Location"]


def test_login_correcto_devuelve_id_de_usuario(client, id_usuario):
    response = client.post("/login", json={"username": "ana", "password": "1234"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["id_usuario"] == id_usuario
    assert data["perfil_completo"] is False
    assert data["redirect"] == "/complete-profile"

    with client.session_transaction() as sess:
        assert sess["user_id"] == id_usuario


def test_login_con_perfil_redirige_al_dashboard(client_con_perfil):
    client_con_perfil.get("/logout")

    response = client_con_perfil.post("/login", data={"username": "ana", "password": "1234"})

    assert response.status_code == 200
    assert response.get_json()["redirect"] == "/dashboard"


def test_login_falla_igual_para_usuario_inexistente_o_password_incorrecta(client):
    mala_password = client.post("/login", json={"username": "ana", "password": "nope"})
    sin_usuario = client.post("/login", json={"username": "nadie", "password": "1234"})

    assert mala_password.status_code == 401
    assert sin_usuario.status_code == 401
    assert mala_password.get_json() == sin_usuario.get_json()
    assert mala_password.get_json()["error"]["message"] == "Usuario o contraseña incorrectos"

    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_login_con_credenciales_que_no_son_texto_falla_igual(client):
    username_numerico = client.post("/login", json={"username": 5, "password": "1234"})
    username_lista = client.post("/login", json={"username": ["ana"], "password": "1234"})
    password_objeto = client.post("/login", json={"username": "ana", "password": {"x": 1}})
    sin_campos = client.post("/login", json={})

    for response in (username_numerico, username_lista, password_objeto, sin_campos):
        assert response.status_code == 401
        assert response.get_json()["error"]["code"] == "invalid_credentials"

    with client.session_transaction() as sess:
        assert "user_id" not in sess


def test_password_numerica_funciona_igual_en_registro_y_login(client):
    response = client.post("/register", json=_registro(password=1234))
    assert response.status_code == 201
    client.get("/logout")

    como_numero = client.post("/login", json={"username": "luis", "password": 1234})
    como_texto = client.post("/login", data={"username": "luis", "password": "1234"})

    assert como_numero.status_code == 200
    assert como_texto.status_code == 200


def test_login_con_body_json_que_no_es_objeto(client):
    response = client.post("/login", json=["ana", "1234"])

    assert response.status_code == 400
    assert response.get_json()["error"]["message"] == "El cuerpo debe ser un objeto JSON."


def test_registro_guarda_hash_y_redirige_a_completar_perfil(app, client):
    response = client.post("/register", json=_registro())

    assert response.status_code == 201
    data = response.get_json()
    assert data["redirect"] == "/complete-profile"

    with app.app_context():
        usuario = db.session.get(Usuario, data["id_usuario"])
        assert usuario.password_hash != "secreta"
        assert usuario.check_password("secreta")

    # recién registrado: el dashboard lo manda a completar el perfil
    response = client.get("/dashboard", follow_redirects=False)
    assert response.status_code == 302
    assert "/complete-profile" in response.headers["Location"]


def test_registro_exige_todos_los_campos(client):
    response = client.post("/register", json=_registro(apellido_materno="  "))

    assert response.status_code == 400
    assert response.get_json()["error"]["message"] == "Todos los campos son obligatorios"


def test_registro_rechaza_usuario_duplicado(client):
    response = client.post("/register", json=_registro(username="ana"))

    assert response.status_code == 409
    assert response.get_json()["error"]["code"] == "conflict"


def test_flujo_registro_completar_perfil_dashboard(client):
    client.post("/register", json=_registro())

    response = client.post("/complete-profile", json={
        "edad": 40,
        "talla_cm": 170,
        "peso_kg": 80.5,
        "tipo_paciente": "Crónico",
        "condiciones": ["Hipertensión", ""],
        "alergias": ["Penicilina"],
    })

    assert response.status_code == 201
    assert response.get_json()["redirect"] == "/dashboard"

    # con perfil completo ya no se puede volver al formulario inicial
    response = client.get("/complete-profile", follow_redirects=False)
    assert response.status_code == 302
    assert "/dashboard" in response.headers["Location"]

    response = client.get("/dashboard")
    assert response.status_code == 200
    data = response.get_json()
    assert data["usuario"]["nombre_completo"] == "Luis Pérez Gómez"
    assert data["condiciones"] == ["Hipertensión"]
    assert data["alergias"] == ["Penicilina"]


def test_logout_limpia_la_sesion(client_con_perfil):
    response = client_con_perfil.get("/logout", follow_redirects=False)

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]

    response = client_con_perfil.get("/dashboard", follow_redirects=False)
    assert "/login" in response.headers["Location"]
