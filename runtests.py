#!/usr/bin/env python

import argparse
import os
import sys
import warnings

from django.core.management import execute_from_command_line

os.environ["DJANGO_SETTINGS_MODULE"] = "viewcomponents.test.settings"


def make_parser():
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--deprecation",
        choices=["all", "viewcomponents", "none"],
        default="viewcomponents",
    )
    return parser


def parse_args(args=None):
    return make_parser().parse_known_args(args)


def runtests():
    args, rest = parse_args()

    only_viewcomponents = r"^viewcomponents(\.|$)"
    if args.deprecation == "all":
        # Show all deprecation warnings from all packages
        warnings.simplefilter("default", DeprecationWarning)
        warnings.simplefilter("default", PendingDeprecationWarning)
    elif args.deprecation == "viewcomponents":
        warnings.filterwarnings(
            "default", category=DeprecationWarning, module=only_viewcomponents
        )
        warnings.filterwarnings(
            "default", category=PendingDeprecationWarning, module=only_viewcomponents
        )
    elif args.deprecation == "none":
        # Deprecation warnings are ignored by default
        pass

    argv = [sys.argv[0], "test"] + rest
    execute_from_command_line(argv)


if __name__ == "__main__":
    runtests()
