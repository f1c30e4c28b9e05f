"""Test the gurutext.__main__ entrypoint module."""

import gettext
import pathlib
from unittest import mock

from gurutext import __main__


@mock.patch.object(__main__, "gettext")
@mock.patch.object(__main__, "pkg_resources")
def test_set_up_gettext(mock_pkg_resources, mock_gettext):
    """Test set_up_gettext expected behavior."""
    base_path = mock_pkg_resources.files.return_value
    locale_path = mock.Mock()
    base_path.joinpath.return_value = locale_path

    __main__.set_up_gettext()

    mock_pkg_resources.files.assert_called_once_with("gurutext")
    base_path.joinpath.assert_called_once_with("locale")
    mock_gettext.bindtextdomain.assert_called_once_with(
        "messages", localedir=str(locale_path)
    )


def test_set_up_gettext_finds_package_locale():
    """Test the locale directory resolves inside the gurutext package."""
    __main__.set_up_gettext()
    locale_dir = pathlib.Path(gettext.bindtextdomain("messages"))
    assert locale_dir.parts[-2:] == ("gurutext", "locale")

def test_main_invokes_other_setup_and_cli_run(mocker):
    """Test the main entrypoint function."""
    # Reimport locally: other tests may already have imported gurutext.cli,
    # and the cached module is what main() imports.
    import gurutext.__main__ as main_module  # noqa: PLC0415

    mock_other_setup = mocker.patch.object(main_module, "set_up_gettext")
    mock_run = mocker.patch("gurutext.cli.run")

    main_module.main()

    mock_other_setup.assert_called_once_with()
    mock_run.assert_called_once_with()
