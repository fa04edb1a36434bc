"""Allow ``python -m codegen_factory``."""

from codegen_factory.main import cli

if __name__ == "__main__":
    cli(prog_name="codegen-factory")
