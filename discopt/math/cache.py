import numpy as np

from discopt.cfg import err


###############################################################################


def get_cache_key(x):
    """
    Gets the hashable cache key of a parameter vector.

    Keys compare by exact coordinate equality, no tolerance is applied.

    Parameters
    ----------
    x : `Array[1, float]` or `Scalar`
        Parameter vector.

    Returns
    -------
    key : `tuple(float)`
        Coordinates as tuple of Python floats.
    """
    return tuple(np.ravel(np.asarray(x, dtype=float)).tolist())


class EvaluationCache(dict):

    """
    Memoization table mapping exact parameter vectors to objective values.

    Behaves as a `dict` with `tuple(float)` keys (see :py:func:`get_cache_key`)
    and additionally records hit/miss statistics and the sign convention
    of the stored values. Owned by the caller: the optimizers only add
    entries, they never evict, clear or copy.

    Parameters
    ----------
    *args, **kwargs
        Passed to `dict` for pre-populating the cache.
    sign : `int` or `None`
        Sign convention of stored values: `+1` for values of a minimized
        objective, `-1` for negated values of a maximized objective.
        `None` binds on first use.

    Notes
    -----
    Not thread-safe. Concurrent optimizer runs must use separate caches.
    """

    def __init__(self, *args, sign=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.sign = None
        if sign is not None:
            self.bind_sign(sign)
        self.hits = 0
        self.misses = 0

    def bind_sign(self, sign):
        """
        Binds the cache to a sign convention.

        Raises
        ------
        discopt.cfg.err.CacheSignError
            If the cache is already bound to the opposite sign.
        """
        if sign not in (1, -1):
            raise ValueError(f"invalid sign ({str(sign)})")
        if self.sign is None:
            self.sign = sign
        elif self.sign != sign:
            raise err.CacheSignError(
                "cache holds {:s} values but is used for {:s}".format(
                    *[_SIGN_NAMES[s] for s in (self.sign, sign)]
                )
            )
        return self

    def lookup(self, key):
        """
        Gets the cached value of `key` and counts the hit or miss.

        Returns
        -------
        found : `bool`
            Whether the key is cached.
        val : `float` or `None`
            Cached value, `None` if not `found`.
        """
        if key in self:
            self.hits += 1
            return True, self[key]
        self.misses += 1
        return False, None

    def get_or_evaluate(self, key, fun, args=(), kwargs=None):
        """
        Gets the cached value of `key`, evaluating `fun` on a miss.

        The function is called as `fun(np.array(key), *args, **kwargs)`
        and its result stored under `key`.
        """
        if kwargs is None:
            kwargs = {}
        found, val = self.lookup(key)
        if not found:
            val = fun(np.array(key, dtype=float), *args, **kwargs)
            self[key] = val
        return val

    def stats(self):
        return {"hits": self.hits, "misses": self.misses, "size": len(self)}

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(size={len(self):d}, "
            f"hits={self.hits:d}, misses={self.misses:d}, "
            f"sign={str(self.sign)})>"
        )


_SIGN_NAMES = {1: "minimization", -1: "maximization"}
