import yaml
from typing import Dict, Any, Optional
from .models import MachineConfig, TimingConfig, DisplayConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        defaults = MachineConfig()

        # Parse Timing
        timing_data = data.get("timing") or {}
        timing = TimingConfig(
            steps_per_second=self._parse_int(timing_data.get("steps_per_second", defaults.timing.steps_per_second)),
            max_steps_per_cycle=self._parse_optional_int(timing_data.get("max_steps_per_cycle")),
            frame_interval_ms=self._parse_int(timing_data.get("frame_interval_ms", defaults.timing.frame_interval_ms)),
        )
        if timing.steps_per_second <= 0:
            raise ValueError(f"steps_per_second must be positive: {timing.steps_per_second}")

        # Parse Display
        display_data = data.get("display") or {}
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", defaults.display.scale)),
            foreground=display_data.get("foreground", defaults.display.foreground),
            background=display_data.get("background", defaults.display.background),
        )
        if display.scale <= 0:
            raise ValueError(f"scale must be positive: {display.scale}")

        # Parse Key Map
        key_map = {}
        for name, value in (data.get("key_map") or {}).items():
            key = self._parse_int(value)
            if not 0 <= key <= 0xF:
                raise ValueError(f"Key map entry '{name}' must map to 0x0-0xF, got {value}")
            key_map[str(name).upper()] = key

        return MachineConfig(timing=timing, display=display, key_map=key_map)

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
