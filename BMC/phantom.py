import numpy as np

from bitpack import pack_bits


def generate_bitmap_phantom(height=48, width=32, seed=0, noise=0.0):
    """
    Binary test bitmap: a few filled ellipses on a white (0) field, like a
    scanned glyph. noise is the probability of flipping any single pixel.
    """
    rng = np.random.default_rng(seed)
    img = np.zeros((height, width), dtype=np.uint8)

    yy, xx = np.mgrid[:height, :width]
    cx, cy = width / 2, height / 2

    # outer ring
    outer = ((xx - cx)**2 / (0.42*width)**2 + (yy - cy)**2 / (0.44*height)**2) <= 1
    inner = ((xx - cx)**2 / (0.26*width)**2 + (yy - cy)**2 / (0.30*height)**2) <= 1
    img[outer & ~inner] = 1

    # stroke crossing the ring
    stroke = ((xx - (cx + 0.18*width))**2 / (0.08*width)**2 + (yy - (cy + 0.25*height))**2 / (0.22*height)**2) <= 1
    img[stroke] = 1

    if noise > 0:
        flip = rng.random((height, width)) < noise
        img[flip] ^= 1
    return img


def image_to_bits(img: np.ndarray, threshold=None) -> np.ndarray:
    """
    Flatten a 2D image to a row-major uint8 0/1 bit array.
    Non-binary images need a threshold (pixel >= threshold -> 1).
    """
    if img.ndim != 2:
        raise ValueError(f"Input image must be 2D, got shape {img.shape}")
    if threshold is not None:
        return (img >= threshold).astype(np.uint8).ravel()
    if not np.all((img == 0) | (img == 1)):
        raise ValueError("Non-binary image: pass a threshold")
    return img.astype(np.uint8).ravel()


def save_phantom(path="data/q32x48.bin", height=48, width=32, seed=0, noise=0.0):
    x = generate_bitmap_phantom(height=height, width=width, seed=seed, noise=noise)
    with open(path, "wb") as f:
        f.write(pack_bits(image_to_bits(x)))
    return path


if __name__ == "__main__":
    p = save_phantom()
    print("Saved:", p)
