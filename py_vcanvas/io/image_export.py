"""Write rendered buffers to disk."""

from pathlib import Path
from typing import Union

import matplotlib.image as mpimg
import numpy as np
import structlog

logger = structlog.get_logger()


def save_image(buffer: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Save an RGBA buffer as an image file.

    The format follows the file extension (PNG for the default output
    path). Missing parent directories are created.

    Args:
        buffer: uint8 array of shape (height, width, 4)
        path: Destination file

    Returns:
        The path written to
    """
    buffer = np.asarray(buffer)
    if buffer.ndim != 3 or buffer.shape[2] not in (3, 4) or buffer.dtype != np.uint8:
        raise ValueError(
            f"Expected a (height, width, 3|4) uint8 buffer, got {buffer.shape} {buffer.dtype}"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    mpimg.imsave(path, buffer)

    logger.info("Image saved", path=str(path), width=buffer.shape[1], height=buffer.shape[0])
    return path
