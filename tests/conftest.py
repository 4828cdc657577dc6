import pytest

from misalud import create_app
from misalud.config import TestConfig
from misalud.models import db, Usuario, PerfilUsuario


@pytest.fixture
def app():
    app = create_app(TestConfig)

    with app.app_context():
        usuario = Usuario(
            nombre="Ana",
            apellido_paterno="López",
            apellido_materno="Ruiz",
            username="ana",
        )
        usuario.set_password("1234")
        db.session.add(usuario)
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def id_usuario(app):
    with app.app_context():
        return Usuario.query.filter_by(username="ana").first().id_usuario


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def client_logueado(client, id_usuario):
    # usuario logueado pero sin perfil completo
    with client.session_transaction() as sess:
        sess["user_id"] = id_usuario
    return client


@pytest.fixture
def client_con_perfil(app, client_logueado, id_usuario):
    with app.app_context():
        db.session.add(PerfilUsuario(
            id_usuario=id_usuario,
            edad=34,
            talla_cm=165,
            peso_kg=62,
            tipo_paciente="Crónico",
        ))
        db.session.commit()
    return client_logueado
