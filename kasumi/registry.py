"""Registry data sent during configuration, and the models it is built from."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Union

from kasumi.codec import BOOL, STRING, PrefixedArray
from kasumi.nbt import Double, Float, Int, to_bytes_unnamed
from kasumi.text import NamedColor

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


@dataclass(frozen=True)
class _Kind:
    load: Callable[[Any], Any]
    dump: Callable[[Any], Any]
    accepts: Callable[[Any], bool]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _load_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value


def _load_i32(value: Any) -> int:
    if not _is_int(value):
        raise ValueError(f"expected an integer, got {value!r}")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"{value} does not fit into a 32-bit integer")
    return value


def _load_number(value: Any) -> float:
    if not _is_number(value):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def _load_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _load_color(value: Any) -> NamedColor | str:
    text = _load_str(value)
    try:
        return NamedColor(text)
    except ValueError:
        return text


_STRING = _Kind(_load_str, str, lambda value: isinstance(value, str))
_I32 = _Kind(_load_i32, Int, _is_int)
_F32 = _Kind(_load_number, Float, _is_number)
_F64 = _Kind(_load_number, Double, _is_number)
_BOOL = _Kind(_load_bool, bool, lambda value: isinstance(value, bool))
_COLOR = _Kind(
    _load_color,
    lambda value: value.value if isinstance(value, NamedColor) else value,
    lambda value: isinstance(value, (NamedColor, str)),
)


def _list_of(kind: _Kind) -> _Kind:
    def load(value: Any) -> list:
        if not isinstance(value, list):
            raise ValueError(f"expected a list, got {value!r}")
        return [kind.load(item) for item in value]

    return _Kind(
        load,
        lambda value: [kind.dump(item) for item in value],
        lambda value: isinstance(value, list),
    )


def _map_of(kind: _Kind) -> _Kind:
    def load(value: Any) -> dict:
        if not isinstance(value, dict):
            raise ValueError(f"expected an object, got {value!r}")
        return {key: kind.load(item) for key, item in value.items()}

    return _Kind(
        load,
        lambda value: {key: kind.dump(item) for key, item in value.items()},
        lambda value: isinstance(value, Mapping),
    )


def _model(cls: type) -> _Kind:
    return _Kind(cls.from_dict, lambda value: value.to_nbt(), lambda value: isinstance(value, cls))


def _one_of(*kinds: _Kind) -> _Kind:
    def load(value: Any) -> Any:
        problems = []
        for kind in kinds:
            try:
                return kind.load(value)
            except ValueError as exc:
                problems.append(str(exc))
        raise ValueError("value matches no variant: " + "; ".join(problems))

    def dump(value: Any) -> Any:
        for kind in kinds:
            if kind.accepts(value):
                return kind.dump(value)
        raise TypeError(f"{value!r} matches no variant")

    return _Kind(load, dump, lambda value: any(kind.accepts(value) for kind in kinds))


def _attr(kind: _Kind, *, key: str | None = None, optional: bool = False) -> Any:
    metadata = {"kind": kind, "key": key}
    if optional:
        return field(default=None, metadata=metadata)
    return field(metadata=metadata)


class NbtModel:
    """Base of the registry models: built from JSON objects, encoded as NBT compounds."""

    @classmethod
    def from_dict(cls, data: Any) -> Any:
        """Build the model from its JSON object; unknown keys are ignored."""
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__}: expected an object, got {data!r}")
        values = {}
        for attribute in fields(cls):
            key = attribute.metadata["key"] or attribute.name
            optional = attribute.default is None
            raw = data.get(key)
            if key not in data and not optional:
                raise ValueError(f"{cls.__name__}: missing field {key!r}")
            if raw is None and optional:
                values[attribute.name] = None
                continue
            try:
                values[attribute.name] = attribute.metadata["kind"].load(raw)
            except ValueError as exc:
                raise ValueError(f"{cls.__name__}.{key}: {exc}") from None
        return cls(**values)

    def to_nbt(self) -> dict:
        """Return the compound form, leaving out absent optional fields."""
        return {
            attribute.metadata["key"] or attribute.name: attribute.metadata["kind"].dump(value)
            for attribute in fields(self)
            if (value := getattr(self, attribute.name)) is not None
        }


@dataclass
class RegistryDataEntry:
    """One named entry of a registry with its optional NBT data."""

    entry_id: str
    data: bytes | None = None

    @classmethod
    def from_nbt(cls, name: str, value: Any) -> RegistryDataEntry:
        """Build an entry holding ``value`` encoded as unnamed NBT."""
        nbt = value.to_nbt() if isinstance(value, NbtModel) else value
        return cls(name, to_bytes_unnamed(nbt))

    def write(self) -> bytes:
        """Encode the entry."""
        encoded = STRING.write(self.entry_id) + BOOL.write(self.data is not None)
        if self.data is not None:
            encoded += bytes(self.data)
        return encoded


@dataclass
class RegistryData:
    """A whole registry as sent to the client."""

    registry_id: str
    entries: list[RegistryDataEntry] = field(default_factory=list)

    def write(self) -> bytes:
        """Encode the registry identifier and its entries."""
        return STRING.write(self.registry_id) + PrefixedArray(RegistryDataEntry).write(self.entries)


@dataclass(kw_only=True)
class RegistryBiomeEffectsParticleOptions(NbtModel):
    option_type: str = _attr(_STRING, key="type")
    value: int | None = _attr(_I32, optional=True)


@dataclass(kw_only=True)
class RegistryBiomeEffectsParticle(NbtModel):
    options: RegistryBiomeEffectsParticleOptions = _attr(
        _model(RegistryBiomeEffectsParticleOptions)
    )
    probability: float = _attr(_F32)


@dataclass(kw_only=True)
class RegistryBiomeEffectsAmbientSound(NbtModel):
    sound_id: str = _attr(_STRING)
    range: float | None = _attr(_F32, optional=True)


@dataclass(kw_only=True)
class RegistryBiomeEffectsMoodSound(NbtModel):
    sound: str = _attr(_STRING)
    tick_delay: int = _attr(_I32)
    block_search_extent: int = _attr(_I32)
    offset: float = _attr(_F64)


@dataclass(kw_only=True)
class RegistryBiomeEffectsAdditionsSound(NbtModel):
    sound: str = _attr(_STRING)
    tick_chance: float = _attr(_F64)


@dataclass(kw_only=True)
class RegistryBiomeEffectsMusicData(NbtModel):
    sound: str = _attr(_STRING)
    min_delay: int = _attr(_I32)
    max_delay: int = _attr(_I32)
    replace_current_music: bool = _attr(_BOOL)


@dataclass(kw_only=True)
class RegistryBiomeEffectsMusic(NbtModel):
    data: RegistryBiomeEffectsMusicData = _attr(_model(RegistryBiomeEffectsMusicData))
    weight: int = _attr(_I32)


@dataclass(kw_only=True)
class RegistryBiomeEffects(NbtModel):
    fog_color: int = _attr(_I32)
    water_color: int = _attr(_I32)
    water_fog_color: int = _attr(_I32)
    sky_color: int = _attr(_I32)
    foliage_color: int | None = _attr(_I32, optional=True)
    grass_color: int | None = _attr(_I32, optional=True)
    grass_color_modifier: str | None = _attr(_STRING, optional=True)
    particle: RegistryBiomeEffectsParticle | None = _attr(
        _model(RegistryBiomeEffectsParticle), optional=True
    )
    ambient_sound: Union[str, RegistryBiomeEffectsAmbientSound, None] = _attr(
        _one_of(_STRING, _model(RegistryBiomeEffectsAmbientSound)), optional=True
    )
    mood_sound: RegistryBiomeEffectsMoodSound | None = _attr(
        _model(RegistryBiomeEffectsMoodSound), optional=True
    )
    additions_sound: RegistryBiomeEffectsAdditionsSound | None = _attr(
        _model(RegistryBiomeEffectsAdditionsSound), optional=True
    )
    music: list[RegistryBiomeEffectsMusic] | None = _attr(
        _list_of(_model(RegistryBiomeEffectsMusic)), optional=True
    )


@dataclass(kw_only=True)
class RegistryBiome(NbtModel):
    has_precipitation: bool = _attr(_BOOL)
    temperature: float = _attr(_F32)
    temperature_modifier: str | None = _attr(_STRING, optional=True)
    downfall: float = _attr(_F32)
    creature_spawn_probability: float | None = _attr(_F32, optional=True)
    carvers: Union[str, list[str]] = _attr(_one_of(_STRING, _list_of(_STRING)))
    features: list[list[str]] = _attr(_list_of(_list_of(_STRING)))
    effects: RegistryBiomeEffects = _attr(_model(RegistryBiomeEffects))


@dataclass(kw_only=True)
class RegistryMobVariant(NbtModel):
    asset_id: str = _attr(_STRING)
    model: str | None = _attr(_STRING, optional=True)


@dataclass(kw_only=True)
class RegistryWolfVariantAssets(NbtModel):
    angry: str = _attr(_STRING)
    tame: str = _attr(_STRING)
    wild: str = _attr(_STRING)


@dataclass(kw_only=True)
class RegistryWolfVariant(NbtModel):
    assets: RegistryWolfVariantAssets = _attr(_model(RegistryWolfVariantAssets))


@dataclass(kw_only=True)
class RegistryWolfSoundVariant(NbtModel):
    ambient_sound: str = _attr(_STRING)
    death_sound: str = _attr(_STRING)
    growl_sound: str = _attr(_STRING)
    hurt_sound: str = _attr(_STRING)
    pant_sound: str = _attr(_STRING)
    whine_sound: str = _attr(_STRING)


@dataclass(kw_only=True)
class RegistryPaintingVariantText(NbtModel):
    """A painting title or author given as a coloured translation."""

    color: Union[NamedColor, str] = _attr(_COLOR)
    translate: str = _attr(_STRING)


_PAINTING_TEXT = _one_of(_STRING, _model(RegistryPaintingVariantText))


@dataclass(kw_only=True)
class RegistryPaintingVariant(NbtModel):
    asset_id: str = _attr(_STRING)
    height: int = _attr(_I32)
    width: int = _attr(_I32)
    title: Union[str, RegistryPaintingVariantText] = _attr(_PAINTING_TEXT)
    author: Union[str, RegistryPaintingVariantText, None] = _attr(_PAINTING_TEXT, optional=True)


@dataclass(kw_only=True)
class RegistryDimensionTypeMonsterSpawnLightLevel(NbtModel):
    light_level_type: str = _attr(_STRING, key="type")
    max_inclusive: int = _attr(_I32)
    min_inclusive: int = _attr(_I32)


@dataclass(kw_only=True)
class RegistryDimensionType(NbtModel):
    ambient_light: float = _attr(_F32)
    bed_works: bool = _attr(_BOOL)
    coordinate_scale: float = _attr(_F32)
    effects: str = _attr(_STRING)
    has_ceiling: bool = _attr(_BOOL)
    has_raids: bool = _attr(_BOOL)
    has_skylight: bool = _attr(_BOOL)
    height: int = _attr(_I32)
    infiniburn: str = _attr(_STRING)
    logical_height: int = _attr(_I32)
    min_y: int = _attr(_I32)
    monster_spawn_block_light_limit: int = _attr(_I32)
    monster_spawn_light_level: Union[int, RegistryDimensionTypeMonsterSpawnLightLevel] = _attr(
        _one_of(_I32, _model(RegistryDimensionTypeMonsterSpawnLightLevel))
    )
    natural: bool = _attr(_BOOL)
    piglin_safe: bool = _attr(_BOOL)
    respawn_anchor_works: bool = _attr(_BOOL)
    ultrawarm: bool = _attr(_BOOL)


@dataclass(kw_only=True)
class RegistryDamageType(NbtModel):
    death_message_type: str | None = _attr(_STRING, optional=True)
    effects: str | None = _attr(_STRING, optional=True)
    exhaustion: float = _attr(_F32)
    message_id: str = _attr(_STRING)
    scaling: str = _attr(_STRING)


@dataclass(kw_only=True)
class Registry(NbtModel):
    """All registries the server sends, keyed by entry name."""

    biome: dict[str, RegistryBiome] = _attr(
        _map_of(_model(RegistryBiome)), key="minecraft:worldgen/biome"
    )
    cat_variant: dict[str, RegistryMobVariant] = _attr(
        _map_of(_model(RegistryMobVariant)), key="minecraft:cat_variant"
    )
    chicken_variant: dict[str, RegistryMobVariant] = _attr(
        _map_of(_model(RegistryMobVariant)), key="minecraft:chicken_variant"
    )
    cow_variant: dict[str, RegistryMobVariant] = _attr(
        _map_of(_model(RegistryMobVariant)), key="minecraft:cow_variant"
    )
    frog_variant: dict[str, RegistryMobVariant] = _attr(
        _map_of(_model(RegistryMobVariant)), key="minecraft:frog_variant"
    )
    pig_variant: dict[str, RegistryMobVariant] = _attr(
        _map_of(_model(RegistryMobVariant)), key="minecraft:pig_variant"
    )
    wolf_variant: dict[str, RegistryWolfVariant] = _attr(
        _map_of(_model(RegistryWolfVariant)), key="minecraft:wolf_variant"
    )
    wolf_sound_variant: dict[str, RegistryWolfSoundVariant] = _attr(
        _map_of(_model(RegistryWolfSoundVariant)), key="minecraft:wolf_sound_variant"
    )
    painting_variant: dict[str, RegistryPaintingVariant] = _attr(
        _map_of(_model(RegistryPaintingVariant)), key="minecraft:painting_variant"
    )
    dimension_type: dict[str, RegistryDimensionType] = _attr(
        _map_of(_model(RegistryDimensionType)), key="minecraft:dimension_type"
    )
    damage_type: dict[str, RegistryDamageType] = _attr(
        _map_of(_model(RegistryDamageType)), key="minecraft:damage_type"
    )

    @classmethod
    def from_dict(cls, data: Any) -> Registry:
        """Build the registries from their JSON object."""
        return super().from_dict(data)

    @classmethod
    def from_json(cls, text: str | bytes) -> Registry:
        """Parse the registries from JSON text."""
        return cls.from_dict(json.loads(text))


def _build(entries: Mapping[str, NbtModel], registry_id: str) -> RegistryData:
    return RegistryData(
        registry_id,
        [RegistryDataEntry.from_nbt(name, value) for name, value in entries.items()],
    )


def build_biome(registry: Registry) -> RegistryData:
    """Build the biome registry."""
    return _build(registry.biome, "minecraft:worldgen/biome")


def build_cat_variant(registry: Registry) -> RegistryData:
    """Build the cat variant registry."""
    return _build(registry.cat_variant, "minecraft:cat_variant")


def build_chicken_variant(registry: Registry) -> RegistryData:
    """Build the chicken variant registry."""
    return _build(registry.chicken_variant, "minecraft:chicken_variant")


def build_cow_variant(registry: Registry) -> RegistryData:
    """Build the cow variant registry."""
    return _build(registry.cow_variant, "minecraft:cow_variant")


def build_frog_variant(registry: Registry) -> RegistryData:
    """Build the frog variant registry."""
    return _build(registry.frog_variant, "minecraft:frog_variant")


def build_pig_variant(registry: Registry) -> RegistryData:
    """Build the pig variant registry."""
    return _build(registry.pig_variant, "minecraft:pig_variant")


def build_wolf_variant(registry: Registry) -> RegistryData:
    """Build the wolf variant registry."""
    return _build(registry.wolf_variant, "minecraft:wolf_variant")


def build_wolf_sound_variant(registry: Registry) -> RegistryData:
    """Build the wolf sound variant registry."""
    return _build(registry.wolf_sound_variant, "minecraft:wolf_sound_variant")


def build_painting_variant(registry: Registry) -> RegistryData:
    """Build the painting variant registry."""
    return _build(registry.painting_variant, "minecraft:painting_variant")


def build_dimension_type(registry: Registry) -> RegistryData:
    """Build the dimension type registry."""
    return _build(registry.dimension_type, "minecraft:dimension_type")


def build_damage_type(registry: Registry) -> RegistryData:
    """Build the damage type registry."""
    return _build(registry.damage_type, "minecraft:damage_type")


def build_registries_data(registry: Registry) -> list[RegistryData]:
    """Build every registry, in the order they are sent to the client."""
    builders = (
        build_biome,
        build_cat_variant,
        build_chicken_variant,
        build_cow_variant,
        build_frog_variant,
        build_pig_variant,
        build_wolf_variant,
        build_wolf_sound_variant,
        build_painting_variant,
        build_dimension_type,
        build_damage_type,
    )
    return [build(registry) for build in builders]