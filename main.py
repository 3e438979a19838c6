from datetime import timedelta
from typing import Annotated

from rich.pretty import pprint

from declargs import *


class Fetch:
    __command__: Annotated[str, "fetch|Download a remote resource"]
    retries: Annotated[int | None, "3|How many times to retry"]
    timeout: Annotated[timedelta | None, "30s|Give up after this long"]
    url: Annotated[str, "Where to download from"]


class Remove:
    __command__: Annotated[str, "rm|Remove a downloaded file"]
    force: Annotated[bool | None, "false|Do not ask for confirmation", Name("f")]
    path: Annotated[str, "File to remove"]


if __name__ == '__main__':
    pprint(run([Fetch, Remove], fancy=True))
