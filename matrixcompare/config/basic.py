"""
Create base configuration class to derive from
"""
import logging
from rich.logging import RichHandler
from dataclasses import dataclass
from simple_parsing import field, ArgumentParser
from simple_parsing.helpers import Serializable
import pathlib as plib

log_module = logging.getLogger(__name__)


def setup_parser(prog_name: str, dict_config_dataclasses: dict, args: list[str] | None = None):
    if not isinstance(dict_config_dataclasses, dict):
        err = (f"Provide a dictionary of config dataclasses (not {type(dict_config_dataclasses)}), "
               f"of structure: dest_name: dataclass.")
        log_module.error(err)
        raise AttributeError(err)

    parser = ArgumentParser(prog=prog_name)
    for name, config_dataclass in dict_config_dataclasses.items():
        parser.add_arguments(config_dataclass, dest=name)
    return parser, parser.parse_args(args)


def setup_program_logging(name: str, level: int = logging.INFO):
    logging.basicConfig(format='[italic sky_blue3]%(name)s[/] --  %(message)s',
                        datefmt='%I:%M:%S',
                        level=level,
                        handlers=[RichHandler(rich_tracebacks=True, markup=True)]
                        )
    # argument parsing internals are not of interest for a comparison run
    logging.getLogger("simple_parsing").setLevel(logging.WARNING)
    logging.info(f"[bold purple3]{name}[/]")


@dataclass
class BaseClass(Serializable):
    config_file: str = field(
        alias="-c", default="",
        help="Input configuration file (.json) covering entries to this Settings object."
    )
    debug: bool = field(
        alias="-d", default=False,
        help="Toggle debugging mode, and logging debug level."
    )

    def non_default_values(self) -> dict:
        """ Fields differing from the class defaults, i.e. given explicitly on the command line. """
        defaults = self.__class__()
        return {key: value for key, value in vars(self).items() if value != getattr(defaults, key)}

    @classmethod
    def from_cli(cls, args: "BaseClass"):
        """
        Resolve the settings parsed by simple_parsing against an optional json config file.
        Values from the config file are used unless the command line sets a non-default value.
        Explicitly given default values can not be told apart and lose against the config file.
        :param args: parsed settings dataclass
        :return: settings instance
        """
        if not args.config_file:
            return args
        file = plib.Path(args.config_file).absolute()
        if not file.is_file():
            err = f"could not find config file: {file}"
            log_module.error(err)
            raise FileNotFoundError(err)
        log_module.debug(f"load config file {file}")
        instance = cls.load(file)
        for key, value in args.non_default_values().items():
            setattr(instance, key, value)
        return instance

    def display(self):
        """ Log the settings, one field per line. """
        width = max((len(k) for k in self.to_dict()), default=0)
        lines = [f"  [yellow]{k.ljust(width)}[/] : {v}" for k, v in self.to_dict().items()]
        log_module.info(f"[bold]{self.__class__.__name__}[/]\n" + "\n".join(lines))
