import os
import warnings

import django


# This function adds command line options to pytest.
def pytest_addoption(parser):
    parser.addoption(
        "--deprecation",
        choices=["all", "viewcomponents", "none"],
        default="viewcomponents",
    )


# This function configures pytest with the provided options.
def pytest_configure(config):
    deprecation = config.getoption("deprecation")

    only_viewcomponents = r"^viewcomponents(\.|$)"
    if deprecation == "all":
        # Show all deprecation warnings from all packages
        warnings.simplefilter("default", DeprecationWarning)
        warnings.simplefilter("default", PendingDeprecationWarning)
    elif deprecation == "viewcomponents":
        warnings.filterwarnings(
            "default", category=DeprecationWarning, module=only_viewcomponents
        )
        warnings.filterwarnings(
            "default", category=PendingDeprecationWarning, module=only_viewcomponents
        )
    elif deprecation == "none":
        # Deprecation warnings are ignored by default
        pass

    # Setup django after processing the pytest arguments so that the env
    # variables are available in the settings
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "viewcomponents.test.settings")
    django.setup()

    # Activate a language so that validation messages are predictable.
    from django.utils import translation

    translation.activate("en")
