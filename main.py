from rich.pretty import pprint

from quiver import *


def build(name, remaining, options):
    pprint({"command": name, "remaining": remaining, "options": options})


program = (
    Program("tool", "1.0.0")
    .option(["o", "output"], "where to write", "out.txt")
    .option(["n", "count"], "how many times", 1)
    .option(["I", "include"], "extra include paths", [])
    .option(["d", "dry-run"], "only print what would happen", False)
    .command("build", "build the project", build, aliases=["b"])
    .example("tool build --output dist", "build into ./dist")
)


if __name__ == '__main__':
    pprint(program.parse({"_": ["build", "fast"], "output": "dist", "include": "src", "d": True}))
