"""Configuration and service factory for the intake service."""
import os
from typing import Dict, Any

from ..core.logging_utils import log_event
from ..services.analysis import BaseAnalysisModel, GeminiAnalysisService
from ..services.store import BaseIntakeStore, InMemoryIntakeStore, JsonFileIntakeStore


# Singleton service instances
_services: Dict[str, Any] = None
_SUPPORTED_ANALYSIS_VALUES = ("gemini",)
_SUPPORTED_STORE_BACKENDS = ("json", "memory")
_DEFAULT_STORE_PATH = os.path.join("data", "intakes.json")


def _normalize_choice(env_name: str, supported: tuple[str, ...], default: str) -> str:
    raw = os.environ.get(env_name, default).strip().lower()
    if raw in supported:
        return raw
    supported_values = ", ".join(supported)
    raise ValueError(
        f"Unsupported {env_name} value '{raw}'. Supported values: {supported_values}."
    )


def _build_analysis(service_name: str) -> BaseAnalysisModel:
    if service_name == "gemini":
        log_event(component="services", event="analysis_backend_selected", details={"backend": "gemini"})
        return GeminiAnalysisService()
    raise ValueError(f"Unsupported analysis service: {service_name}")


def _build_store(backend_name: str) -> BaseIntakeStore:
    if backend_name == "memory":
        store: BaseIntakeStore = InMemoryIntakeStore()
    elif backend_name == "json":
        path = os.environ.get("INTAKE_STORE_PATH", "").strip() or _DEFAULT_STORE_PATH
        store = JsonFileIntakeStore(path)
        store.load()
    else:
        raise ValueError(f"Unsupported store backend: {backend_name}")
    log_event(
        component="services",
        event="store_backend_selected",
        details={"backend": backend_name, "records": len(store)},
    )
    return store


def get_services() -> Dict[str, Any]:
    """
    Factory function to get or initialize service instances.

    Returns a dictionary with:
        - 'analysis': structured analysis service
        - 'store': intake record store, already loaded
    """
    global _services
    if _services is None:
        analysis_name = _normalize_choice("ANALYSIS_SERVICE", _SUPPORTED_ANALYSIS_VALUES, "gemini")
        store_backend = _normalize_choice("INTAKE_STORE_BACKEND", _SUPPORTED_STORE_BACKENDS, "json")

        _services = {
            "analysis": _build_analysis(analysis_name),
            "store": _build_store(store_backend),
        }
    return _services


def get_analysis_service() -> BaseAnalysisModel:
    """Get the analysis service instance."""
    return get_services()["analysis"]


def get_intake_store() -> BaseIntakeStore:
    """Get the intake store instance."""
    return get_services()["store"]
