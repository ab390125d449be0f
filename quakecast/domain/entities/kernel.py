"""Domain entity for the ETAS-style intensity kernel parameters."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class KernelParams:
    """
    Named constants of the intensity kernel.

    Versioned alongside a trained model: the artifact stores the exact
    parameters used to compute the ``etas`` feature during training.
    """

    K: float = 0.02  # productivity
    alpha: float = 1.1  # magnitude scaling
    p: float = 1.2  # Omori temporal decay exponent
    c: float = 0.01  # days
    q: float = 1.5  # spatial decay exponent
    d: float = 10.0  # km, spatial core radius
    M0: float = 3.0  # reference magnitude
    time_window_days: float = 90.0
    radius_km: float = 300.0

    def with_overrides(self, **overrides: Any) -> "KernelParams":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, float]:
        payload = asdict(self)
        payload["timeWindowDays"] = payload.pop("time_window_days")
        payload["radiusKm"] = payload.pop("radius_km")
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "KernelParams":
        defaults = cls()
        return cls(
            K=float(payload.get("K", defaults.K)),
            alpha=float(payload.get("alpha", defaults.alpha)),
            p=float(payload.get("p", defaults.p)),
            c=float(payload.get("c", defaults.c)),
            q=float(payload.get("q", defaults.q)),
            d=float(payload.get("d", defaults.d)),
            M0=float(payload.get("M0", defaults.M0)),
            time_window_days=float(
                payload.get("timeWindowDays", defaults.time_window_days)
            ),
            radius_km=float(payload.get("radiusKm", defaults.radius_km)),
        )


DEFAULT_KERNEL_PARAMS = KernelParams()
