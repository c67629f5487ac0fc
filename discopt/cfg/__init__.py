from . import default           # noqa
from . import err               # noqa
