"""
Contains various default values used within the package.
"""

from discopt.env.logging import WARNING


###############################################################################


class OPTIMIZE:

    # Number of discrete steps per dimension and direction per iteration
    SEARCH_RANGE = 1
    # Maximum number of descent iterations before failing
    MAXITER = 10000
    # Threads for concurrent objective evaluation, `None`: sequential
    MAX_WORKERS = None


class LOGGING:

    # Default level of package loggers
    LEVEL = WARNING
