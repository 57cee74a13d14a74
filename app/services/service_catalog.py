import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Step between candidate slot starts, independent of service duration
MIN_APPOINTMENT_SEPARATION = 30
DEFAULT_SERVICE_DURATION = 30
DEFAULT_SERVICE_COLOR = "#5FA98D"


@dataclass(frozen=True)
class ServiceType:
    name: str
    duration: int  # minutes
    color: str = DEFAULT_SERVICE_COLOR


SERVICE_TYPES: tuple[ServiceType, ...] = (
    ServiceType("Consulta General", 60, "#5FA98D"),
    ServiceType("Control Médico", 45, "#8B93C7"),
    ServiceType("Toma de Exámenes", 30, "#87CEEB"),
    ServiceType("Vacunación", 30, "#98D8C8"),
    ServiceType("Desparasitación", 30, "#FFB6C1"),
    ServiceType("Control Anual", 60, "#DDA0DD"),
    ServiceType("Certificado de Salud", 30, "#F0E68C"),
)

_BY_NAME = {s.name: s for s in SERVICE_TYPES}


def find_service(name: str | None) -> ServiceType | None:
    if not name:
        return None
    return _BY_NAME.get(name)


def get_service_duration(name: str | None) -> int:
    """Duration in minutes; unknown or missing names fall back to the default."""
    service = find_service(name)
    if service:
        return service.duration
    if name:
        logger.warning(
            "Unknown service type %r, using default duration of %d minutes",
            name,
            DEFAULT_SERVICE_DURATION,
        )
    return DEFAULT_SERVICE_DURATION


def get_service_color(name: str | None) -> str:
    service = find_service(name)
    return service.color if service else DEFAULT_SERVICE_COLOR


def get_service_names() -> list[str]:
    return [s.name for s in SERVICE_TYPES]
