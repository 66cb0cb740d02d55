from pydantic import BaseModel, field_validator

from fault_harmonics.signal.windows import WindowSpec


class Settings(BaseModel):
    # 0.5 ms sampling -> 2 kHz
    sample_period_s: float = 0.0005

    # 200 samples = 100 ms window, 2 samples = 1 ms step
    window_samples: int = 200
    step_samples: int = 2

    fundamental_hz: float = 50.0
    max_harmonic: int = 9

    phases: tuple[str, ...] = ("A", "B", "C")

    # Log a progress line every N windows
    progress_every: int = 100

    # Thread pool size for window processing (1 = sequential)
    workers: int = 1

    @field_validator("window_samples")
    @classmethod
    def _even_window(cls, v: int) -> int:
        if v < 2 or v % 2:
            raise ValueError(f"window_samples must be an even number >= 2, got {v}")
        return v

    @field_validator("step_samples", "max_harmonic", "progress_every", "workers")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    @field_validator("sample_period_s", "fundamental_hz")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError(f"must be > 0, got {v}")
        return v

    @property
    def sample_rate_hz(self) -> float:
        return 1.0 / self.sample_period_s

    def orders(self) -> tuple[int, ...]:
        return tuple(range(1, self.max_harmonic + 1))

    def window_spec(self) -> WindowSpec:
        return WindowSpec(
            window_samples=self.window_samples,
            step_samples=self.step_samples,
            sample_period_s=self.sample_period_s,
        )

settings = Settings()
