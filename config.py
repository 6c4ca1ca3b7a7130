# config.py — analysis constants as one runtime structure
from __future__ import annotations
from dataclasses import dataclass

WINDOW_SIZE_PS = 32000   # laser period, 32 ns
WIDTH_PS = 3000          # analysis window, 3 ns
SLOT_PS = 1000           # one time bin, 1 ns
GUARD_BAND_PS = 100
GB_MIN_PS = 100
GB_MAX_PS = 300
GB_STEP_PS = 1
LABEL = "G1"


@dataclass
class BerConfig:
    window_size: int = WINDOW_SIZE_PS
    width: int = WIDTH_PS
    slot: int = SLOT_PS
    guard_band: int = GUARD_BAND_PS
    gb_min: int = GB_MIN_PS
    gb_max: int = GB_MAX_PS
    gb_step: int = GB_STEP_PS
    label: str = LABEL
    sweep: bool = False

    def validate(self) -> "BerConfig":
        if self.window_size <= 0:
            raise ValueError("window size must be > 0.")
        if self.width < 3 or self.width > self.window_size:
            raise ValueError(f"window width must be in [3, {self.window_size}], got {self.width}.")
        if self.slot <= 0:
            raise ValueError("slot width must be > 0.")
        if self.guard_band < 0:
            raise ValueError("guard band must be >= 0.")
        if self.sweep:
            if self.gb_step <= 0:
                raise ValueError("guard band step must be > 0.")
            if self.gb_min < 0 or self.gb_min > self.gb_max:
                raise ValueError(f"invalid guard band range [{self.gb_min}, {self.gb_max}].")
        return self

    @classmethod
    def from_args(cls, args) -> "BerConfig":
        """Build from an argparse namespace carrying the run.py flags."""
        return cls(
            window_size=args.window_size,
            width=args.width,
            slot=args.slot,
            guard_band=args.guard_band,
            gb_min=args.gb_min,
            gb_max=args.gb_max,
            gb_step=args.gb_step,
            label=args.label,
            sweep=args.sweep,
        )
