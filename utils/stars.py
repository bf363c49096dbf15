"""Star field for the landing page background."""

import math
import random
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Star:
    x: float
    y: float
    radius: float
    opacity: float
    twinkle_speed: Optional[float] = None  # seconds per cycle; None = static


def generate_stars(
    width: int,
    height: int,
    star_density: float = 0.00015,
    all_stars_twinkle: bool = True,
    twinkle_probability: float = 0.7,
    min_twinkle_speed: float = 0.5,
    max_twinkle_speed: float = 1.0,
    seed: Optional[int] = None,
) -> List[Star]:
    """
    Scatter stars over a width x height canvas.

    The star count is floor(width * height * star_density). When
    all_stars_twinkle is False, each star twinkles with twinkle_probability.
    Pass a seed for a reproducible field.
    """
    if width <= 0 or height <= 0 or star_density <= 0:
        return []
    if min_twinkle_speed > max_twinkle_speed:
        raise ValueError("min_twinkle_speed must not exceed max_twinkle_speed")

    rng = random.Random(seed)
    count = math.floor(width * height * star_density)

    stars = []
    for _ in range(count):
        twinkles = all_stars_twinkle or rng.random() < twinkle_probability
        stars.append(Star(
            x=round(rng.random() * width, 2),
            y=round(rng.random() * height, 2),
            radius=round(rng.random() * 0.5 + 0.5, 3),
            opacity=round(rng.random() * 0.5 + 0.5, 3),
            twinkle_speed=round(rng.uniform(min_twinkle_speed, max_twinkle_speed), 3) if twinkles else None,
        ))
    return stars
