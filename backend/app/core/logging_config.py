"""Configuration du système de logging centralisé (fichiers journaliers + données JSON)."""

import glob
import json
import logging
import logging.handlers
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

from bson import ObjectId

from app.core.settings import get_settings


class CustomJSONEncoder(json.JSONEncoder):
    """Encodeur JSON personnalisé pour gérer ObjectId et datetime."""

    def default(self, obj):
        if isinstance(obj, ObjectId):
            return str(obj)
        elif isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class DataLogger:
    """Logger spécialisé pour les rapports volumineux, écrits en JSON."""

    def __init__(self, logs_dir: str = "logs"):
        self.logs_dir = Path(logs_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def log_data(
        self,
        calling_context: str,
        data: Dict[str, Any],
        user_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Ajoute une entrée au fichier `<date>-data.json` du jour.

        Description:
            Le fichier reste un tableau JSON valide : on retire le `]` final, on ajoute
            l'entrée puis on referme le tableau.

        Args:
            calling_context (str): Origine de l'entrée (ex. `maintenance.reconcile`).
            data (dict): Données à archiver.
            user_data (dict | None): Identité / contexte de l'appelant.
        """
        today = datetime.now().strftime("%Y-%m-%d")
        json_file = self.logs_dir / f"{today}-data.json"

        entry = {
            "datetime": datetime.now().isoformat(),
            "calling_context": calling_context,
            "user_data": user_data or {},
            "data": data,
        }
        payload = json.dumps(entry, cls=CustomJSONEncoder)

        if json_file.exists():
            content = json_file.read_text(encoding="utf-8").rstrip()
            if content.endswith("]"):
                content = content[:-1].rstrip()
            if content.endswith("}"):
                content += ","
            if not content:
                content = "["
            json_file.write_text(content + payload + "]", encoding="utf-8")
        else:
            json_file.write_text("[" + payload + "]", encoding="utf-8")


def _daily_handler(path: Path, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=path, when="midnight", interval=1, encoding="utf-8"
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> tuple[logging.Logger, logging.Logger, DataLogger]:
    """Configure le système de logging avec rotation quotidienne.

    Returns:
        tuple: (logger_generic, logger_errors, data_logger)
    """
    settings = get_settings()
    logs_dir = Path(settings.logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    cleanup_old_logs(logs_dir, settings.log_retention_days)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Logger générique (INFO+)
    generic_logger = logging.getLogger("ecotrack.generic")
    generic_logger.setLevel(logging.INFO)
    if not generic_logger.handlers:
        generic_logger.addHandler(_daily_handler(logs_dir / "generic.log", formatter))

    # Logger erreurs (ERROR+)
    error_logger = logging.getLogger("ecotrack.errors")
    error_logger.setLevel(logging.ERROR)
    if not error_logger.handlers:
        error_logger.addHandler(_daily_handler(logs_dir / "errors.log", formatter))

    data_logger = DataLogger(str(logs_dir))

    return generic_logger, error_logger, data_logger


def cleanup_old_logs(logs_dir: Path, retention_days: int = 30) -> None:
    """Supprime les fichiers de logs datés de plus de `retention_days` jours."""
    cutoff_str = (datetime.now() - timedelta(days=retention_days)).strftime("%Y-%m-%d")

    patterns = [
        f"{logs_dir}/*-data.json",
        f"{logs_dir}/generic.log.*",
        f"{logs_dir}/errors.log.*",
    ]

    for pattern in patterns:
        for file_path in glob.glob(pattern):
            file_name = os.path.basename(file_path)
            # Date en préfixe (data.json) ou en suffixe (rotation)
            for date_part in (file_name[:10], file_name[-10:]):
                try:
                    datetime.strptime(date_part, "%Y-%m-%d")
                except ValueError:
                    continue
                if date_part < cutoff_str:
                    try:
                        os.remove(file_path)
                    except OSError:
                        logging.getLogger(__name__).warning("Could not remove %s", file_path)
                break


# Instance globale (lazy initialization)
_loggers: Optional[tuple[logging.Logger, logging.Logger, DataLogger]] = None


def get_loggers() -> tuple[logging.Logger, logging.Logger, DataLogger]:
    """Retourne les loggers configurés (singleton)."""
    global _loggers
    if _loggers is None:
        _loggers = setup_logging()
    return _loggers


def extract_user_data(user_email: Optional[str] = None, request=None) -> Dict[str, Any]:
    """Extrait les données utilisateur pour le logging."""
    user_data: Dict[str, Any] = {}

    if user_email:
        user_data["user"] = user_email

    if request is not None:
        if getattr(request, "client", None):
            user_data["ip"] = request.client.host
        user_agent = request.headers.get("user-agent") if hasattr(request, "headers") else None
        if user_agent:
            user_data["user_agent"] = user_agent

    return user_data
