from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()

ESTADO_CITA_PENDIENTE = "Pendiente"
ESTADO_MEDICAMENTO_ACTIVO = "activo"


class TipoAtencionEnum(Enum):
    HOSPITALARIA  = "Hospitalaria"
    VIRTUAL       = "Virtual"
    DOMICILIARIA  = "Domiciliaria"


class TipoMedicamentoEnum(Enum):
    ANALGESICO        = "Analgésico"
    ANTIBIOTICO       = "Antibiótico"
    ANTIINFLAMATORIO  = "Antiinflamatorio"
    ANTIHIPERTENSIVO  = "Antihipertensivo"
    VITAMINA          = "Vitamina"
    OTRO              = "Otro"


def _fecha(valor):
    return valor.isoformat() if valor else None


def _hora(valor):
    return valor.strftime("%H:%M") if valor else None


class Usuario(db.Model):
    __tablename__ = "usuarios"

    id_usuario = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    apellido_paterno = db.Column(db.String(100), nullable=False)
    apellido_materno = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    foto_perfil_url = db.Column(db.String(500))

    perfil = db.relationship("PerfilUsuario", backref="usuario", uselist=False)

    # Métodos para manejar contraseñas
    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def nombre_completo(self):
        return f"{self.nombre} {self.apellido_paterno} {self.apellido_materno}"

    def to_dict(self):
        return {
            "id_usuario": self.id_usuario,
            "nombre": self.nombre,
            "apellido_paterno": self.apellido_paterno,
            "apellido_materno": self.apellido_materno,
            "username": self.username,
            "foto_perfil_url": self.foto_perfil_url,
        }


class PerfilUsuario(db.Model):
    __tablename__ = "perfil_usuario"

    id_perfil = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), unique=True, nullable=False)
    edad = db.Column(db.SmallInteger, nullable=False)
    talla_cm = db.Column(db.Numeric(5, 1), nullable=False)
    peso_kg = db.Column(db.Numeric(5, 1), nullable=False)
    tipo_paciente = db.Column(db.String(50), nullable=False)

    def to_dict(self):
        return {
            "id_perfil": self.id_perfil,
            "id_usuario": self.id_usuario,
            "edad": self.edad,
            "talla_cm": float(self.talla_cm) if self.talla_cm is not None else None,
            "peso_kg": float(self.peso_kg) if self.peso_kg is not None else None,
            "tipo_paciente": self.tipo_paciente,
        }


class CondicionMedica(db.Model):
    __tablename__ = "condiciones_medicas"

    id_condicion = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(150), unique=True, nullable=False)


class Alergia(db.Model):
    __tablename__ = "alergias"

    id_alergia = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(150), unique=True, nullable=False)


class UsuarioCondicion(db.Model):
    __tablename__ = "usuarios_condiciones"

    id_usuario_cond = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    id_condicion = db.Column(db.Integer, db.ForeignKey("condiciones_medicas.id_condicion"), nullable=False)

    condicion = db.relationship("CondicionMedica")


class UsuarioAlergia(db.Model):
    __tablename__ = "usuarios_alergias"

    id_usuario_alergia = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    id_alergia = db.Column(db.Integer, db.ForeignKey("alergias.id_alergia"), nullable=False)

    alergia = db.relationship("Alergia")


class Cita(db.Model):
    __tablename__ = "citas"

    id_cita = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    fecha = db.Column(db.Date, nullable=False)
    hora = db.Column(db.Time, nullable=False)
    especialidad = db.Column(db.String(100), nullable=False)
    motivo = db.Column(db.String(500))
    tipo_atencion = db.Column(db.String(20), nullable=False)  # Hospitalaria/Virtual/Domiciliaria
    ubicacion = db.Column(db.String(200))
    doctor = db.Column(db.String(100), nullable=False)
    estado = db.Column(db.String(20), nullable=False, default=ESTADO_CITA_PENDIENTE)
    notas = db.Column(db.String(500))

    def to_dict(self):
        return {
            "id_cita": self.id_cita,
            "id_usuario": self.id_usuario,
            "fecha": _fecha(self.fecha),
            "hora": _hora(self.hora),
            "especialidad": self.especialidad,
            "motivo": self.motivo,
            "tipo_atencion": self.tipo_atencion,
            "ubicacion": self.ubicacion,
            "doctor": self.doctor,
            "estado": self.estado,
            "notas": self.notas,
        }


class Medicamento(db.Model):
    __tablename__ = "medicamentos"

    id_medicamento = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    nombre = db.Column(db.String(200), nullable=False)
    tipo = db.Column(db.String(50), nullable=False)

    detalles = db.relationship("MedicamentoDetalle", backref="medicamento", lazy=True)

    def to_dict(self):
        return {
            "id_medicamento": self.id_medicamento,
            "id_usuario": self.id_usuario,
            "nombre": self.nombre,
            "tipo": self.tipo,
            "medicamento_detalle": [d.to_dict() for d in self.detalles],
        }


class MedicamentoDetalle(db.Model):
    __tablename__ = "medicamento_detalle"

    id_detalle = db.Column(db.Integer, primary_key=True)
    id_medicamento = db.Column(db.Integer, db.ForeignKey("medicamentos.id_medicamento"), nullable=False, index=True)
    frecuencia = db.Column(db.String(100), nullable=False)
    hora_primera_dosis = db.Column(db.Time, nullable=False)
    duracion_dias = db.Column(db.Integer, nullable=False)
    estado = db.Column(db.String(20), nullable=False)  # activo/completado/suspendido
    proxima_toma = db.Column(db.Time)
    dosis_restantes = db.Column(db.Integer)

    def to_dict(self):
        return {
            "id_detalle": self.id_detalle,
            "id_medicamento": self.id_medicamento,
            "frecuencia": self.frecuencia,
            "hora_primera_dosis": _hora(self.hora_primera_dosis),
            "duracion_dias": self.duracion_dias,
            "estado": self.estado,
            "proxima_toma": _hora(self.proxima_toma),
            "dosis_restantes": self.dosis_restantes,
        }


class SignoVital(db.Model):
    __tablename__ = "signos_vitales"

    id_signo = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    fecha_hora = db.Column(db.DateTime, default=datetime.now, nullable=False, index=True)
    presion_arterial = db.Column(db.String(20))
    temperatura = db.Column(db.Numeric(4, 1))
    pasos = db.Column(db.Integer)
    horas_sueno = db.Column(db.Numeric(4, 1))
    calorias_quemadas = db.Column(db.Integer)

    def to_dict(self):
        return {
            "id_signo": self.id_signo,
            "id_usuario": self.id_usuario,
            "fecha_hora": self.fecha_hora.isoformat() if self.fecha_hora else None,
            "presion_arterial": self.presion_arterial,
            "temperatura": float(self.temperatura) if self.temperatura is not None else None,
            "pasos": self.pasos,
            "horas_sueno": float(self.horas_sueno) if self.horas_sueno is not None else None,
            "calorias_quemadas": self.calorias_quemadas,
        }


class HistorialMedico(db.Model):
    __tablename__ = "historial_medico"

    id_historial = db.Column(db.Integer, primary_key=True)
    id_usuario = db.Column(db.Integer, db.ForeignKey("usuarios.id_usuario"), nullable=False, index=True)
    tipo_historial = db.Column(db.String(50), nullable=False)  # cirugia, vacuna, ...
    descripcion = db.Column(db.String(500), nullable=False)

    def to_dict(self):
        return {
            "id_historial": self.id_historial,
            "id_usuario": self.id_usuario,
            "tipo_historial": self.tipo_historial,
            "descripcion": self.descripcion,
        }
