from typing import Optional, Sequence

from .models import FavorType, RewardType


FAVOR_TYPES: tuple[FavorType, ...] = (
    FavorType(id="foto", name="Foto linda sin que la pida", points=1),
    FavorType(id="preparar", name="Preparar/servir algo", points=1),
    FavorType(id="mimos", name="Mimos", points=1),
    FavorType(id="compu", name="Prestar compu", points=1),
    FavorType(id="masajes", name="Masajes 10 min", points=2),
    FavorType(id="actividad", name="Acompañar a actividad", points=2),
    FavorType(id="pelo", name="Lavar/secar pelo", points=2),
    FavorType(id="fiaca", name="Fiaca en cama juntos", points=2),
    FavorType(id="regional", name="Traer algo regional", points=2),
    FavorType(id="sorpresa", name="Sorpresa linda", points=3),
    FavorType(id="premium", name="Servicio premium", points=3),
)

REWARD_TYPES: tuple[RewardType, ...] = (
    RewardType(id="alarma", name="Pospuesto extra alarma", cost=1),
    RewardType(id="bano", name="10 min extra baño", cost=1),
    RewardType(id="fotos", name="Sesión fotos sin límite", cost=2),
    RewardType(id="elegir", name="Elegir actividad del día", cost=2),
    RewardType(id="tarde", name="Tarde libre", cost=2),
    RewardType(id="notebook", name="Hora de notebook", cost=2),
    RewardType(id="masajes_largos", name="Masajes largos ❤️", cost=3),
    RewardType(id="premium_canje", name="Servicio premium 🔥", cost=3),
)


def find_favor_type(favor_type_id: str, favor_types: Sequence[FavorType] = FAVOR_TYPES) -> Optional[FavorType]:
    return next((t for t in favor_types if t.id == favor_type_id), None)


def find_reward_type(reward_type_id: str, reward_types: Sequence[RewardType] = REWARD_TYPES) -> Optional[RewardType]:
    return next((t for t in reward_types if t.id == reward_type_id), None)
