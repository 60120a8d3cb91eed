"""
Excepciones HTTP personalizadas para la API.
Los fallos del backend NO se expresan con excepciones: ver core/result.py.
"""

from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    """Recurso no encontrado en el snapshot (404)."""

    def __init__(self, resource: str = "Recurso", detail: str | None = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} no encontrado",
        )


class ConflictException(HTTPException):
    """Conflicto de datos (409): DNI duplicado o día con capacidad ya cargada."""

    def __init__(self, detail: str = "El recurso ya existe"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class ValidationException(HTTPException):
    """Error de validación de negocio (422)."""

    def __init__(self, detail: str = "Error de validación"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )
