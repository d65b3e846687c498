"""The core package of the tplmatch project provides the matching engine and its image collaborators.

It includes modules for raster normalization, integral images, candidate ranking, pixel-exact refinement and the
top-level matching operation, plus thin OpenCV helpers for loading images and presenting results.

Modules:
- raster: Normalization of arrays and Pillow images into rasters.
- integral: Summed-area tables with constant-time window sums.
- ranking: Bounded candidate list and the window scan.
- refinement: Sum-of-absolute-differences scoring of candidates.
- matcher: The ``match`` entry point.
- image_io: Image loading, overlay drawing, display and saving.
"""

__all__ = (
    "CandidateList",
    "IntegralImage",
    "build_integral_image",
    "check_valid_images",
    "draw_match",
    "load_image",
    "match",
    "rank_candidates",
    "refine",
    "save_match",
    "scan_positions",
    "show_match",
    "sum_of_absolute_differences",
    "to_raster",
)


from .decorators import check_valid_images
from .image_io import draw_match, load_image, save_match, show_match
from .integral import IntegralImage, build_integral_image
from .matcher import match
from .ranking import CandidateList, rank_candidates, scan_positions
from .raster import to_raster
from .refinement import refine, sum_of_absolute_differences
