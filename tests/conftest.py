import textwrap

import hypothesis
import pytest

from potable.po import parse_string

############
# PATCHING #
############


# disable hypothesis deadline globally
hypothesis.settings.register_profile("ci", deadline=None)
hypothesis.settings.load_profile("ci")


def pytest_configure(config):
    config.addinivalue_line("markers", "fuzzing: property based tests driven by hypothesis")


@pytest.fixture
def make_file(tmp_path):
    # writes file_contents to file_name, creating it in the
    # tmp_path directory. returns final path.
    def fn(file_name, file_contents):
        path = tmp_path / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(file_contents)

        return path

    return fn


@pytest.fixture
def parse():
    # parse dedented catalog text
    def fn(source):
        return parse_string(textwrap.dedent(source).lstrip("\n"))

    return fn
