class MiSaludError(Exception):
    """Error base de la aplicación. Cada subclase define su código y status HTTP."""

    code = "server_error"
    status = 500

    def __init__(self, message="Ocurrió un error", field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        error = {"code": self.code, "message": self.message}
        if self.field:
            error["field"] = self.field
        return {"ok": False, "error": error}


class ValidacionError(MiSaludError):
    code = "validation_error"
    status = 400


class CredencialesInvalidasError(MiSaludError):
    code = "invalid_credentials"
    status = 401

    def __init__(self, message="Usuario o contraseña incorrectos"):
        super().__init__(message)


class NoEncontradoError(MiSaludError):
    code = "not_found"
    status = 404


class ConflictoError(MiSaludError):
    code = "conflict"
    status = 409
