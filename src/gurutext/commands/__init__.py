"""Package of self-contained commands.

The CLI loads the modules in this package dynamically at startup.
Valid command modules in this package should implement an interface like the following:

    def get_help() -> str:
        # One line of help text for `gurutext --help`.
        return _("Extract strings from somewhere.")

    def setup_parser(parser: argparse.ArgumentParser) -> None:
        # Optional additions to this command's argparse subparser.
        common.add_extraction_arguments(parser)

    def run(args: argparse.Namespace) -> bool:
        # Implementation of this command's functionality.
        # Return False to make the CLI exit with a non-zero status.
        return common.write_catalog(extractor.extract(), args)

The module's name will be the CLI's positional argument to invoke the command.
For example, invoking `gurutext --help` may produce output like the following:

    $ gurutext --help
    usage: gurutext [-h] [-v] [-q] {callers,positions} ...

    positional arguments:
      {callers,positions}
        callers            Extract strings passed to the functions at the given offsets.
        positions          Extract strings passed to calls at the given positions.

If the module has attribute `NOT_A_COMMAND=True` set, it will not be included
by argparse as a valid positional argument.
"""
