import sys

from rich.pretty import pprint

from tinyargs import *

registry = ArgumentRegistry()
registry.flag("-h", "--help", descr="Show this help and exit")
registry.flag("-v", "--verbose", descr="Print the parsed registry")
registry.value("-n", "--name", required=True, descr="Who to greet")
registry.value("-g", "--greeting", descr="Greeting to use")


if __name__ == '__main__':
    result = registry.parse(sys.argv)
    if registry.is_flag_set("--help") or not result:
        registry.print_help()
        sys.exit(0 if result else 1)
    if registry.is_flag_set("--verbose"):
        pprint(registry)
    print(registry.get_value("--greeting") or "Hello", registry.get_value("--name"))
