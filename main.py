from rich.pretty import pprint

from dotarguments import *


class Arguments:
    source: str = PositionalValue(0)
    jobs: int = NamedValue("--jobs", "-j", optional=True, default=1)
    debug = Switch("--debug", "-d")
    rest: list[str] = Remaining()


if __name__ == '__main__':
    arguments = run(Arguments)
    pprint({slot.name: getattr(arguments, slot.name) for slot in ArgumentDefinition.discover(Arguments).slots})
