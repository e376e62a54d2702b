# portfolio/core/logging.py
import logging

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

# Librerías ruidosas que solo interesan en DEBUG
_NOISY_LOGGERS = ("sqlalchemy.engine", "urllib3", "google.auth")


def configure_logging(level: int | None = None, *, debug: bool = False) -> None:
    if level is None:
        level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )
    if level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
