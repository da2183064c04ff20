import numpy as np

# --- membership ---
def _universe(x):
    return np.atleast_1d(np.asarray(x, float))

def _unwrap(x, mu):
    return float(mu[0]) if np.ndim(x) == 0 else mu.reshape(np.shape(x))

def triangular(x, a, b, c):
    """Triangle rising from a to a peak of 1 at b and falling back to 0 at c.

    A coincident pair (a == b or b == c) turns that side into a shoulder held at 1.
    Accepts a scalar (returns float) or an array-like (returns ndarray).
    """
    if not a <= b <= c:
        raise ValueError("Triangular parameters must satisfy a <= b <= c.")
    U = _universe(x); mu = np.zeros_like(U)
    if a == b:
        mu[U <= b] = 1.0
        m = (U > b) & (U <= c)
        if c > b: mu[m] = (c - U[m]) / (c - b)
    elif b == c:
        mu[U >= b] = 1.0
        m = (U >= a) & (U < b)
        mu[m] = (U[m] - a) / (b - a)
    else:
        m = (U >= a) & (U <= b)
        mu[m] = (U[m] - a) / (b - a)
        m = (U > b) & (U <= c)
        mu[m] = (c - U[m]) / (c - b)
    return _unwrap(x, np.clip(mu, 0, 1))

def trapezoidal(x, a, b, c, d):
    """Trapezoid: ramp a..b, plateau b..c, ramp c..d.

    c == d leaves the right side open (1 for every x >= b), a == b the left side
    (1 for every x <= c). Both together give 1 everywhere.
    """
    if not a <= b <= c <= d:
        raise ValueError("Trapezoidal parameters must satisfy a <= b <= c <= d.")
    U = _universe(x); mu = np.zeros_like(U)
    if a == b and c == d:
        mu[:] = 1.0
        return _unwrap(x, mu)
    if a == b:
        mu[U <= c] = 1.0
        m = (U > c) & (U <= d)
        if d > c: mu[m] = (d - U[m]) / (d - c)
        return _unwrap(x, mu)
    if c == d:
        mu[U >= b] = 1.0
        m = (U >= a) & (U < b)
        mu[m] = (U[m] - a) / (b - a)
        return _unwrap(x, mu)
    m = (U >= a) & (U <= b)
    mu[m] = (U[m] - a) / (b - a)
    mu[(U >= b) & (U <= c)] = 1.0
    m = (U > c) & (U <= d)
    mu[m] = (d - U[m]) / (d - c)
    return _unwrap(x, np.clip(mu, 0, 1))

SHAPES = {
    "Triangular": triangular,
    "Trapezoidal": trapezoidal,
}

def build_membership(x, mtype, params):
    if mtype not in SHAPES:
        raise ValueError(f"Unknown membership type: {mtype!r}.")
    return SHAPES[mtype](x, *params)

# --- set ops (same universe) ---
def union(*mus):                return np.maximum.reduce([np.asarray(mu, float) for mu in mus])
def clip(alpha, muB):           return np.minimum(float(alpha), muB)   # Mamdani implication

# --- defuzz ---
def centroid(U, mu, empty=0.0):
    """Center of gravity of ``mu`` over ``U``; ``empty`` when the area is exactly zero."""
    U = np.asarray(U, float); mu = np.asarray(mu, float)
    s = np.sum(mu)
    if s == 0.0:
        return float(empty)
    return float(np.sum(U * mu) / s)
