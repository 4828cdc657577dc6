"""
Estructuras tipadas para los datos que llegan en cada request.

Cada clase se construye con ``desde_datos(datos)``, donde ``datos`` es el JSON
del body (dict) o el ``request.form`` (MultiDict). Si algún campo no es
válido se lanza ``ValidacionError`` indicando el campo.
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .exceptions import ValidacionError
from .models import TipoAtencionEnum, TipoMedicamentoEnum


# ---------------------------- HELPERS ----------------------------

def _texto(datos, campo, requerido=True):
    valor = datos.get(campo)
    valor = str(valor).strip() if valor is not None else ""
    if not valor:
        if requerido:
            raise ValidacionError(f"El campo '{campo}' es obligatorio.", field=campo)
        return None
    return valor


def _entero(datos, campo, requerido=True, minimo=None, maximo=None):
    valor = _texto(datos, campo, requerido)
    if valor is None:
        return None
    try:
        numero = int(valor)
    except ValueError:
        raise ValidacionError(f"El campo '{campo}' debe ser un número entero.", field=campo)
    if (minimo is not None and numero < minimo) or (maximo is not None and numero > maximo):
        raise ValidacionError(f"El campo '{campo}' está fuera de rango.", field=campo)
    return numero


def _decimal(datos, campo, requerido=True, positivo=False):
    valor = _texto(datos, campo, requerido)
    if valor is None:
        return None
    try:
        numero = Decimal(valor.replace(",", "."))
    except InvalidOperation:
        raise ValidacionError(f"El campo '{campo}' debe ser un número válido.", field=campo)
    if not numero.is_finite() or (positivo and numero <= 0):
        raise ValidacionError(f"El campo '{campo}' debe ser mayor a cero.", field=campo)
    return numero


def _fecha(datos, campo) -> date:
    valor = _texto(datos, campo)
    try:
        return datetime.strptime(valor, "%Y-%m-%d").date()
    except ValueError:
        raise ValidacionError(f"La fecha '{campo}' no es válida (YYYY-MM-DD).", field=campo)


def _hora(datos, campo) -> time:
    valor = _texto(datos, campo)
    for formato in ("%H:%M", "%H:%M:%S", "%I:%M %p"):
        try:
            return datetime.strptime(valor.upper(), formato).time()
        except ValueError:
            continue
    raise ValidacionError(f"La hora '{campo}' no es válida (HH:MM).", field=campo)


def _lista(datos, campo) -> List[str]:
    if hasattr(datos, "getlist"):
        valores = datos.getlist(campo)
    else:
        valores = datos.get(campo) or []
        if isinstance(valores, str):
            valores = [valores]
    if not isinstance(valores, (list, tuple)):
        raise ValidacionError(f"El campo '{campo}' debe ser una lista.", field=campo)
    return [str(v) for v in valores if v is not None]


def _booleano(datos, campo, default=False):
    valor = datos.get(campo)
    if valor is None:
        return default
    if isinstance(valor, bool):
        return valor
    return str(valor).strip().lower() in ("1", "true", "si", "sí", "on")


def parsear_duracion(valor) -> int:
    """Acepta 7, "7" o "7 días" y devuelve la cantidad de días."""
    if isinstance(valor, bool):
        raise ValidacionError("La duración no es válida.", field="duracion_dias")
    if isinstance(valor, int):
        dias = valor
    else:
        m = re.search(r"\d+", str(valor or ""))
        if not m:
            raise ValidacionError("La duración debe indicar una cantidad de días.", field="duracion_dias")
        dias = int(m.group(0))
    if dias <= 0:
        raise ValidacionError("La duración debe ser mayor a cero.", field="duracion_dias")
    return dias


# ---------------------------- AUTH ----------------------------

@dataclass
class RegistroRequest:
    nombre: str
    apellido_paterno: str
    apellido_materno: str
    username: str
    password: str

    @classmethod
    def desde_datos(cls, datos):
        campos = ("nombre", "apellido_paterno", "apellido_materno", "username", "password")
        if any(not str(datos.get(c) or "").strip() for c in campos):
            raise ValidacionError("Todos los campos son obligatorios")
        valores = {c: _texto(datos, c) for c in campos[:-1]}
        # la contraseña se guarda tal cual llega, sin recortar espacios
        return cls(password=str(datos.get("password")), **valores)


@dataclass
class LoginRequest:
    username: str
    password: str

    @classmethod
    def desde_datos(cls, datos):
        # mismo criterio que el registro: todo se compara como texto
        username = datos.get("username")
        password = datos.get("password")
        return cls(
            username=str(username).strip() if username is not None else "",
            password=str(password) if password is not None else "",
        )


# ---------------------------- PERFIL ----------------------------

@dataclass
class PerfilRequest:
    edad: int
    talla_cm: Decimal
    peso_kg: Decimal
    tipo_paciente: str
    condiciones: List[str] = field(default_factory=list)
    alergias: List[str] = field(default_factory=list)

    @classmethod
    def desde_datos(cls, datos):
        return cls(
            edad=_entero(datos, "edad", minimo=0, maximo=150),
            talla_cm=_decimal(datos, "talla_cm", positivo=True),
            peso_kg=_decimal(datos, "peso_kg", positivo=True),
            tipo_paciente=_texto(datos, "tipo_paciente"),
            condiciones=_lista(datos, "condiciones"),
            alergias=_lista(datos, "alergias"),
        )


@dataclass
class PerfilCompletoRequest:
    nombre: str
    apellido_paterno: str
    apellido_materno: str
    perfil: PerfilRequest

    @classmethod
    def desde_datos(cls, datos):
        return cls(
            nombre=_texto(datos, "nombre"),
            apellido_paterno=_texto(datos, "apellido_paterno"),
            apellido_materno=_texto(datos, "apellido_materno"),
            perfil=PerfilRequest.desde_datos(datos),
        )


# ---------------------------- CITAS ----------------------------

@dataclass
class CitaRequest:
    fecha: date
    hora: time
    especialidad: str
    motivo: Optional[str] = None
    tipo_atencion: str = TipoAtencionEnum.HOSPITALARIA.value
    ubicacion: Optional[str] = None
    doctor: Optional[str] = None
    notas: Optional[str] = None

    @classmethod
    def desde_datos(cls, datos):
        tipo = _texto(datos, "tipo_atencion", requerido=False) or TipoAtencionEnum.HOSPITALARIA.value
        if tipo not in [t.value for t in TipoAtencionEnum]:
            raise ValidacionError(f"Tipo de atención inválido: {tipo}", field="tipo_atencion")

        return cls(
            fecha=_fecha(datos, "fecha"),
            hora=_hora(datos, "hora"),
            especialidad=_texto(datos, "especialidad"),
            motivo=_texto(datos, "motivo", requerido=False),
            tipo_atencion=tipo,
            ubicacion=_texto(datos, "ubicacion", requerido=False),
            doctor=_texto(datos, "doctor", requerido=False),
            notas=_texto(datos, "notas", requerido=False),
        )


# ---------------------------- MEDICAMENTOS ----------------------------

@dataclass
class MedicamentoRequest:
    nombre: str
    tipo: str
    frecuencia: str
    hora_primera_dosis: time
    duracion_dias: int
    notificaciones: bool = True

    @classmethod
    def desde_datos(cls, datos):
        tipo = _texto(datos, "tipo", requerido=False) or TipoMedicamentoEnum.ANALGESICO.value
        if tipo not in [t.value for t in TipoMedicamentoEnum]:
            raise ValidacionError(f"Tipo de medicamento inválido: {tipo}", field="tipo")

        duracion = datos.get("duracion_dias", datos.get("duracion"))

        return cls(
            nombre=_texto(datos, "nombre"),
            tipo=tipo,
            frecuencia=_texto(datos, "frecuencia"),
            hora_primera_dosis=_hora(datos, "hora_primera_dosis"),
            duracion_dias=parsear_duracion(duracion),
            notificaciones=_booleano(datos, "notificaciones", default=True),
        )


# ---------------------------- SALUD ----------------------------

@dataclass
class SignoVitalRequest:
    presion_arterial: Optional[str] = None
    temperatura: Optional[Decimal] = None
    pasos: Optional[int] = None
    horas_sueno: Optional[Decimal] = None
    calorias_quemadas: Optional[int] = None

    @classmethod
    def desde_datos(cls, datos):
        signos = cls(
            presion_arterial=_texto(datos, "presion_arterial", requerido=False),
            temperatura=_decimal(datos, "temperatura", requerido=False, positivo=True),
            pasos=_entero(datos, "pasos", requerido=False, minimo=0),
            horas_sueno=_decimal(datos, "horas_sueno", requerido=False),
            calorias_quemadas=_entero(datos, "calorias_quemadas", requerido=False, minimo=0),
        )
        if signos.horas_sueno is not None and signos.horas_sueno < 0:
            raise ValidacionError("Las horas de sueño no pueden ser negativas.", field="horas_sueno")
        if signos.presion_arterial and not re.fullmatch(r"\d{2,3}/\d{2,3}", signos.presion_arterial):
            raise ValidacionError("La presión arterial debe tener el formato 120/80.", field="presion_arterial")
        if all(v is None for v in vars(signos).values()):
            raise ValidacionError("Debés registrar al menos un signo vital.")
        return signos


@dataclass
class HistorialRequest:
    tipo_historial: str
    descripcion: str

    @classmethod
    def desde_datos(cls, datos):
        return cls(
            tipo_historial=_texto(datos, "tipo_historial"),
            descripcion=_texto(datos, "descripcion"),
        )
