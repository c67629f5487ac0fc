from . import env               # noqa
from . import cfg               # noqa
from . import math              # noqa

from .env import DISCOPT_VERSION as __version__    # noqa
