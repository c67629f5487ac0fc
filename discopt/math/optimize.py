import concurrent.futures
import contextlib

import numpy as np

from discopt.cfg import default, err
from discopt.env import logging
from discopt.math.cache import EvaluationCache, get_cache_key
from discopt.math.lattice import NeighborLattice

LOGGER = logging.get_logger(
    "discopt.math.optimize", level=default.LOGGING.LEVEL
)


###############################################################################
# Parameter parsing
###############################################################################


def parse_step_parameters(x0, dx):
    """
    Broadcasts initial point and discrete steps to a common dimension.

    Parameters
    ----------
    x0 : `Array[1]` or `Scalar`
        Initial point.
    dx : `Array[1]` or `Scalar`
        Discrete steps along each dimension.

    Returns
    -------
    x : `Array[1, float]`
        Initial point with shape `[ndim]`.
    dx : `Array[1, float]`
        Discrete steps with shape `[ndim]`.
    is_scalar : `bool`
        Whether both `x0` and `dx` were given as scalars.

    Raises
    ------
    discopt.cfg.err.DimensionMismatchError
        If the dimensions cannot be broadcast.

    Examples
    --------
    >>> parse_step_parameters(2, [0.5, 0.5, 0.5])[0]
    array([2., 2., 2.])
    >>> parse_step_parameters([1, 2], 0.1)[1]
    array([0.1, 0.1])
    """
    is_scalar = bool(np.isscalar(x0) and np.isscalar(dx))
    x = np.atleast_1d(np.array(x0, dtype=float))
    dx = np.atleast_1d(np.array(dx, dtype=float))
    if x.ndim != 1 or dx.ndim != 1:
        raise err.DimensionMismatchError(
            "`x0` and `dx` must be scalar or one-dimensional "
            f"(shapes {str(x.shape)}, {str(dx.shape)})"
        )
    if x.size == 1 and dx.size > 0:
        x = np.full(dx.size, x[0], dtype=float)
    elif dx.size == 1 and x.size > 0:
        dx = np.full(x.size, dx[0], dtype=float)
    elif x.size != dx.size:
        raise err.DimensionMismatchError(
            f"cannot broadcast `x0` (size {x.size:d}) "
            f"and `dx` (size {dx.size:d})"
        )
    if x.size == 0:
        raise err.DimensionMismatchError("`x0` and `dx` must not be empty")
    return x, dx, is_scalar


###############################################################################
# Stepwise descent
###############################################################################


def _lookup(results_cache, key):
    if isinstance(results_cache, EvaluationCache):
        return results_cache.lookup(key)
    if key in results_cache:
        return True, results_cache[key]
    return False, None


def _get_or_evaluate(results_cache, key, fun, args, kwargs):
    if isinstance(results_cache, EvaluationCache):
        return results_cache.get_or_evaluate(
            key, fun, args=args, kwargs=kwargs
        )
    if key not in results_cache:
        results_cache[key] = fun(np.array(key, dtype=float), *args, **kwargs)
    return results_cache[key]


def _get_executor(max_workers):
    """
    Gets a thread pool for `max_workers > 1`, otherwise a null context.

    Raises
    ------
    ValueError
        If `max_workers` is smaller than `1`.
    """
    if max_workers is None:
        return contextlib.nullcontext()
    if max_workers < 1:
        raise ValueError(
            f"`max_workers` must be positive or None ({str(max_workers)})"
        )
    if max_workers == 1:
        return contextlib.nullcontext()
    return concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)


def _evaluate_candidates(
    fun, x_mg, results_cache, args, kwargs, executor=None
):
    """
    Gets the objective values of all candidate points.

    Cached values are reused, missing ones are evaluated and stored.
    With an `executor`, missing values are evaluated concurrently but
    stored in enumeration order on the calling thread.

    Returns
    -------
    res_mg : `Array[1, float]`
        Objective values with shape `[nsteps]`.
    """
    res_mg = np.full(len(x_mg), np.nan, dtype=float)    # [nsteps]
    pending = {}
    for idx in range(len(x_mg)):
        key = get_cache_key(x_mg[idx])
        if key in pending:
            pending[key].append(idx)
            continue
        if executor is None:
            res_mg[idx] = _get_or_evaluate(
                results_cache, key, fun, args, kwargs
            )
            pending[key] = [idx]
            continue
        found, val = _lookup(results_cache, key)
        if found:
            res_mg[idx] = val
        else:
            pending[key] = [idx]
    if executor is not None and len(pending) > 0:
        keys = list(pending)
        vals = list(executor.map(
            lambda key: fun(x_mg[pending[key][0]], *args, **kwargs), keys
        ))
        for key, val in zip(keys, vals):
            results_cache[key] = val
            res_mg[pending[key][0]] = val
    for idxs in pending.values():
        res_mg[idxs[1:]] = res_mg[idxs[0]]
    return res_mg


def _argmin_first(res_mg):
    """
    Gets the index of the first minimum, ranking NaN after any number
    (including `+inf`).
    """
    return int(np.lexsort((res_mg, np.isnan(res_mg)))[0])


def _descend_discrete_stepwise(
    fun, x0, args=(), kwargs=None, dx=1,
    search_range=default.OPTIMIZE.SEARCH_RANGE,
    maxiter=default.OPTIMIZE.MAXITER, results_cache=None, ret_cache=False,
    max_workers=default.OPTIMIZE.MAX_WORKERS, sign=1
):
    # Parse parameters
    if kwargs is None:
        kwargs = {}
    x, dx, is_scalar = parse_step_parameters(x0, dx)
    # Initialize optimization variables
    lattice = NeighborLattice(dx, search_range=search_range)
    executor_context = _get_executor(max_workers)
    # Cache sign is bound only once all parameters are valid
    if results_cache is None:
        results_cache = EvaluationCache(sign=sign)
    elif isinstance(results_cache, EvaluationCache):
        results_cache.bind_sign(sign)
    LOGGER.debug(f"descending on {repr(lattice)} from `x` = {str(x)}")
    # Perform optimization
    converged = False
    niter = 0
    with executor_context as executor:
        for niter in range(1, maxiter + 1):
            # Get result for each step direction
            x_mg = lattice.candidates(x)                 # [nsteps, ndim]
            res_mg = _evaluate_candidates(
                fun, x_mg, results_cache,
                args, kwargs, executor=executor
            )
            # Find best step direction
            idx_min = _argmin_first(res_mg)
            x = x_mg[idx_min]
            LOGGER.debug(
                f"iteration {niter:d}: `x` = {str(x)}, "
                f"`fun(x)` = {sign * res_mg[idx_min]}"
            )
            # Check convergence
            if lattice.is_zero_offset(idx_min):
                converged = True
                break
    # Return results
    if not converged:
        LOGGER.warning(
            f"`maxiter` ({maxiter:d}) reached without convergence"
        )
        raise err.NonConvergenceError(x=x, niter=niter)
    LOGGER.info(
        f"converged after {niter:d} iterations "
        f"(cache size: {len(results_cache):d})"
    )
    if is_scalar:
        ret = x[0]
    else:
        ret = x
    if ret_cache:
        return ret, results_cache
    else:
        return ret


def minimize_discrete_stepwise(
    fun, x0, args=(), kwargs=None, dx=1,
    search_range=default.OPTIMIZE.SEARCH_RANGE,
    maxiter=default.OPTIMIZE.MAXITER, results_cache=None, ret_cache=False,
    max_workers=default.OPTIMIZE.MAX_WORKERS
):
    """
    Minimizes a discrete function by nearest neighbour descent.

    Each iteration evaluates the function on all `(2 * search_range + 1)**ndim`
    grid points around the current point and moves to the smallest one.
    Ties are resolved in favour of the first point in row-major order of the
    step offsets (see :py:class:`discopt.math.lattice.NeighborLattice`).
    Converges when the current point itself is selected.

    Parameters
    ----------
    fun : `callable`
        Function to be minimized.
        Its signature must be `fun(x0, *args, **kwargs) -> float`.
    x0 : `Array[1]` or `Scalar`
        Initial guess for solution.
    args : `tuple(Any)`
        Additional function arguments.
    kwargs : `dict(str->Any)`
        Function keyword arguments.
    dx : `Array[1]` or `Scalar`
        Discrete steps along each dimension.
        If scalar, applies given step to all dimensions.
    search_range : `int`
        Number of discrete steps to be evaluated per iteration.
        E.g. `search_range = 1` means evaluating in the range `[-1, 0, 1]`.
        Larger `search_range` avoids ending in local optimum but is slower.
    maxiter : `int`
        Maximum number of optimization steps.
    results_cache : `dict` or `EvaluationCache` or `None`
        Dictionary of pre-calculated results, mapping `tuple(float)`
        keys to function values. Updated in place.
    ret_cache : `bool`
        Whether to return the `results_cache`.
    max_workers : `int` or `None`
        Number of threads evaluating uncached points concurrently.
        `None` or `1` evaluates sequentially.

    Returns
    -------
    x : `Array[1, float]` or `float`
        Solution. Scalar or vectorial depending on `x0`.
    results_cache : `dict`
        Results cache. Only returned if `ret_cache is True`.

    Raises
    ------
    discopt.cfg.err.NonConvergenceError
        If `maxiter` is reached without convergence.
    discopt.cfg.err.DimensionMismatchError
        If `x0` and `dx` cannot be broadcast.
    ValueError
        If `search_range` is negative or `max_workers` is smaller than `1`.
    """
    return _descend_discrete_stepwise(
        fun, x0, args=args, kwargs=kwargs, dx=dx, search_range=search_range,
        maxiter=maxiter, results_cache=results_cache, ret_cache=ret_cache,
        max_workers=max_workers, sign=1
    )


def maximize_discrete_stepwise(fun, *args, **kwargs):
    """
    Analogous to :py:func:`minimize_discrete_stepwise` but maximizing.

    The `results_cache` stores negated function values and must not be
    shared with minimizations of the same function.
    """
    def neg_fun(*_args, **_kwargs):
        return -fun(*_args, **_kwargs)
    return _descend_discrete_stepwise(neg_fun, *args, sign=-1, **kwargs)


maximize_discrete_stepwise.__doc__ += (
    """
    ++++++++++++++++++++++++++++++++++++++++++++++++++++++
    Documentation of :py:func:`minimize_discrete_stepwise`
    ++++++++++++++++++++++++++++++++++++++++++++++++++++++
    """
    + minimize_discrete_stepwise.__doc__
)
