from . import logging           # noqa


###############################################################################
# Package metadata
###############################################################################


DISCOPT_VERSION_MAJOR = 1
DISCOPT_VERSION_MINOR = 0
DISCOPT_VERSION_DEV = "dev"
DISCOPT_VERSION = (
    str(DISCOPT_VERSION_MAJOR) + "."
    + str(DISCOPT_VERSION_MINOR)
    + DISCOPT_VERSION_DEV
)
