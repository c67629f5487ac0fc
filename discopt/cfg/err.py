###############################################################################
# discopt Exception Framework
###############################################################################


class ErrorDescription(object):

    """
    Provides exception descriptions.

    Each custom exception should have an instance of `ErrorDescription` as
    class variable. It contains a default description of the exception.

    Parameters
    ----------
    description : str
        Default exception description.
    code : positive int or None, optional
        Numerical error code.

    Raises
    ------
    TypeError
        If a passed data type is invalid.
    """

    def __init__(self, description, code=None):
        if not isinstance(description, str):
            raise TypeError("invalid description ({:s})"
                            .format(str(type(description))))
        if code is not None and (type(code) != int or code <= 0):
            raise TypeError("invalid code ({:s})"
                            .format(str(code)))
        self.description = description
        self.code = code

    def __str__(self):
        """
        Generates a string of error code (if available) and error description.
        """
        s = ""
        if self.code is not None:
            s = "[{:d}] ".format(self.code)
        s += self.description
        return s

    def __int__(self):
        """
        Gets the (positive) error code.

        For a missing error code, `-1` is returned.
        """
        code = self.code
        if code is None:
            code = -1
        return code


class DiscoptError(Exception):

    """
    Generic discopt exception base class.

    Implements `ErrorDescription` class object and an error description class
    method. Instantiating without message uses the default description.
    """

    _err_description = ErrorDescription(
        "generic discopt error",
        code=1
    )

    def __init__(self, *args):
        if len(args) == 0:
            args = (self.str(),)
        super().__init__(*args)

    @classmethod
    def str(cls):
        return str(cls._err_description)

    @classmethod
    def code(cls):
        return int(cls._err_description)


def assertion(exception, *args, description=None):
    """
    Asserts that the passed values are `True`.

    Parameters
    ----------
    exception : Exception or inherited
        Exception to be raised
    *args : bool
        Boolean values to be checked for validity.
    description : str
        Exception description that overwrites the default
        description.

    Raises
    ------
    CustomException
        If any `args` value is not `True`, the given exception
        is raised.
    """
    if not issubclass(exception, Exception):
        raise TypeError("invalid type: non-exception type")
    for arg in args:
        if arg is not True:
            if description is None and issubclass(exception, DiscoptError):
                raise exception(exception.str())
            else:
                raise exception(description)


###############################################################################
# discopt Exception Implementation
###############################################################################


# ++++++++++++++++++++++++++++++++++++++++++++++++++
# 100: Optimization
# ++++++++++++++++++++++++++++++++++++++++++++++++++


class NonConvergenceError(DiscoptError, RuntimeError):

    """
    Raised if the iteration limit is reached without convergence.

    Parameters
    ----------
    x : `Array[1, float]` or `None`
        Last (non-optimal) point of the descent.
    niter : `int` or `None`
        Number of performed iterations.
    """

    _err_description = ErrorDescription(
        "optimization: maxiter reached without convergence",
        100
    )

    def __init__(self, *args, x=None, niter=None):
        if len(args) == 0 and x is not None:
            args = ("`maxiter` reached without convergence "
                    f"(`x` = {str(x)})",)
        super().__init__(*args)
        self.x = x
        self.niter = niter


# ++++++++++++++++++++++++++++++++++++++++++++++++++
# 200: Parameters
# ++++++++++++++++++++++++++++++++++++++++++++++++++


class DimensionMismatchError(DiscoptError, ValueError):
    _err_description = ErrorDescription(
        "parameters: dimension mismatch between point and step",
        200
    )


# ++++++++++++++++++++++++++++++++++++++++++++++++++
# 300: Cache
# ++++++++++++++++++++++++++++++++++++++++++++++++++


class CacheSignError(DiscoptError, ValueError):
    _err_description = ErrorDescription(
        "cache: sign convention mismatch (minimize vs. maximize)",
        300
    )
