import unittest

import numpy as np

from discopt.cfg import err
from discopt.math.cache import EvaluationCache, get_cache_key


###############################################################################


class CacheKeyTestCase(unittest.TestCase):

    def test_key_type(self):
        key = get_cache_key(np.array([1, 2.5]))
        self.assertEqual(key, (1.0, 2.5))
        self.assertTrue(all(type(k) is float for k in key))
        self.assertEqual(get_cache_key(3), (3.0,))

    def test_exact_equality(self):
        self.assertNotEqual(
            get_cache_key([0.1 + 0.2]), get_cache_key([0.3])
        )
        self.assertEqual(
            hash(get_cache_key([0.5, 1.0])), hash(get_cache_key([0.5, 1]))
        )


class EvaluationCacheTestCase(unittest.TestCase):

    def setUp(self):
        self.ncalls = 0

    def _fun(self, x, offset=0):
        self.ncalls += 1
        return float(np.sum(x)) + offset

    def test_get_or_evaluate(self):
        cache = EvaluationCache()
        self.assertEqual(cache.get_or_evaluate((1.0, 2.0), self._fun), 3.0)
        self.assertEqual(
            cache.get_or_evaluate(
                (1.0, 2.0), self._fun, kwargs={"offset": 5}
            ), 3.0
        )
        self.assertEqual(self.ncalls, 1)
        self.assertEqual(cache.stats(), {"hits": 1, "misses": 1, "size": 1})

    def test_prepopulated(self):
        cache = EvaluationCache({(0.0,): -1.0})
        self.assertEqual(cache.get_or_evaluate((0.0,), self._fun), -1.0)
        self.assertEqual(self.ncalls, 0)

    def test_sign(self):
        cache = EvaluationCache()
        self.assertIsNone(cache.sign)
        cache.bind_sign(1)
        cache.bind_sign(1)
        with self.assertRaises(err.CacheSignError):
            cache.bind_sign(-1)
        with self.assertRaises(ValueError):
            EvaluationCache(sign=0)


###############################################################################


if __name__ == '__main__':
    unittest.main()
