"""펫 상태 시뮬레이션 Core — 순수 Python, DB 무관"""

from .models import Pet, PetAction, PetKind, apply_action
from .vitals import VITALS, clamp

__all__ = [
    "Pet",
    "PetAction",
    "PetKind",
    "apply_action",
    "VITALS",
    "clamp",
]
