from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator

from config.settings import Settings
from corkscrew import Corkscrew
from geometry import CorkscrewInput, Gap
from screenmap import DEFAULT_DIAMETER


class GapConfig(BaseModel):
    every_n_leds: int = Field(0, ge=0, description="Insert a gap after this many LEDs; 0 disables.")
    extra_width: float = Field(0.0, ge=0.0, description="Gap size in LED pitches.")

    @model_validator(mode="after")
    def _validate_gap(self) -> "GapConfig":
        if self.extra_width > 0.0 and self.every_n_leds < 1:
            raise ValueError("every_n_leds must be >= 1 when extra_width > 0")
        return self

    def to_gap(self) -> Gap:
        return Gap(every_n_leds=self.every_n_leds, extra_width=self.extra_width)


class CorkscrewConfig(BaseModel):
    total_turns: float = Field(19.0, gt=0.0, description="Full turns of the strip around the cylinder.")
    num_leds: int = Field(144, ge=1)
    invert: bool = Field(False, description="Strip runs from the far end.")
    gap: GapConfig = Field(default_factory=GapConfig)

    cache_enabled: bool = True
    multi_sampling: bool = Field(True, description="Bilinear sampling in read_from; nearest cell when false.")
    screen_map_diameter: float = Field(DEFAULT_DIAMETER, gt=0.0)

    def to_input(self) -> CorkscrewInput:
        return CorkscrewInput(
            total_turns=self.total_turns,
            num_leds=self.num_leds,
            invert=self.invert,
            gap=self.gap.to_gap(),
        )

    @classmethod
    def from_input(cls, inp: CorkscrewInput, **kwargs: Any) -> "CorkscrewConfig":
        inp = inp.normalized()
        every = inp.gap.every_n_leds
        # a gap without a run length never triggers
        extra = inp.gap.extra_width if every >= 1 else 0.0
        return cls(
            total_turns=inp.total_turns,
            num_leds=inp.num_leds,
            invert=inp.invert,
            gap=GapConfig(every_n_leds=every, extra_width=extra),
            **kwargs,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CorkscrewConfig":
        return cls.from_input(
            settings.corkscrew_input(),
            cache_enabled=settings.cache_enabled,
            multi_sampling=settings.multi_sampling,
            screen_map_diameter=settings.screen_map_diameter,
        )

    def build(self) -> Corkscrew:
        return Corkscrew(
            self.to_input(),
            caching=self.cache_enabled,
            multi_sampling=self.multi_sampling,
        )

    def as_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
