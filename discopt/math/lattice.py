import numpy as np


###############################################################################


class NeighborLattice(object):

    """
    Fixed set of neighbour offsets around a point on a discrete grid.

    The offsets are the Cartesian product of `[-k, ..., k]` steps along
    each dimension, enumerated in row-major order (last dimension varies
    fastest). The enumeration order determines tie-breaking in the
    stepwise optimizers.

    Parameters
    ----------
    dx : `Array[1, float]`
        Discrete step along each dimension.
    search_range : `int`
        Number of steps `k` per dimension and direction.

    Attributes
    ----------
    levels : `Array[2, int]`
        Integer step multiples with shape `[(2k+1)^ndim, ndim]`.
    offsets : `Array[2, float]`
        Offset vectors `levels * dx` with shape `[(2k+1)^ndim, ndim]`.

    Examples
    --------
    >>> lattice = NeighborLattice([0.5, 2], search_range=1)
    >>> lattice.size
    9
    >>> lattice.offsets[:3]
    array([[-0.5, -2. ],
           [-0.5,  0. ],
           [-0.5,  2. ]])
    """

    def __init__(self, dx, search_range=1):
        if (
            isinstance(search_range, (bool, np.bool_))
            or not isinstance(search_range, (int, np.integer))
        ):
            raise ValueError(
                f"invalid `search_range` ({str(search_range)})"
            )
        if search_range < 0:
            raise ValueError(
                f"`search_range` must be non-negative ({search_range:d})"
            )
        self._step = np.array(dx, dtype=float)      # [ndim]
        if self._step.ndim != 1:
            raise ValueError("`dx` must be one-dimensional")
        self._search_range = int(search_range)
        self.levels = self._build_levels(self.ndim, self._search_range)
        self.offsets = self.levels * self._step     # [nsteps, ndim]

    @staticmethod
    def _build_levels(ndim, search_range):
        """
        Gets the row-major step multiples of the lattice.

        Row `i`, column `j` equals
        `(i % (range_j * nlevels)) // range_j - search_range`
        with `nlevels = 2 * search_range + 1` and
        `range_j = nlevels**(ndim - j - 1)`.
        """
        nlevels = 2 * search_range + 1
        size = nlevels**ndim
        idx = np.arange(size)[:, np.newaxis]                # [nsteps, 1]
        ranges = nlevels**np.arange(ndim - 1, -1, -1)       # [ndim]
        return (idx % (ranges * nlevels)) // ranges - search_range

    # ++++++++++++++++++++++++++++++++++++++++

    @property
    def ndim(self):
        return len(self._step)

    @property
    def size(self):
        return self.offsets.shape[0]

    @property
    def search_range(self):
        return self._search_range

    @property
    def step(self):
        return self._step.copy()

    @property
    def center_index(self):
        """Index of the all-zero step multiple."""
        return (self.size - 1) // 2

    def candidates(self, x):
        """
        Gets the points reachable from `x`.

        Returns
        -------
        x_mg : `Array[2, float]`
            Candidate points with shape `[nsteps, ndim]`.
        """
        return self.offsets + np.asarray(x, dtype=float)

    def is_zero_offset(self, idx):
        """
        Checks whether the offset with index `idx` is the zero vector.

        With zero step components, multiple offsets may be zero.
        """
        return bool(np.all(self.offsets[idx] == 0))

    def __len__(self):
        return self.size

    def __repr__(self):
        return (
            f"<{self.__class__.__name__}(ndim={self.ndim:d}, "
            f"search_range={self.search_range:d}, size={self.size:d})>"
        )
