"""Shared fixtures: a fake WebHare installation under tmp_path."""

import pytest

from webhare_mcp.config.settings import WebHareSettings, get_all_flags, set_flag


FAKE_WH = """#!/bin/bash
case "$1" in
  getmodulelist) printf 'modA  modB   modC\\n' ;;
  isrunning) [ -f "$WEBHARE_DATAROOT/running" ] ;;
  echo) shift; echo "$*" ;;
  argc) shift; echo "$#" ;;
  env) echo "$WEBHARE_DIR|$WEBHARE_DATAROOT|$WEBHARE_BASEPORT|$HOME|$FAKE_HELPER_LOADED" ;;
  pwd) pwd ;;
  partial) echo "partial output"; exit 3 ;;
  fail) echo "boom" >&2; exit 2 ;;
  silent) ;;
  *) echo "unknown command: $1" >&2; exit 1 ;;
esac
"""

FAKE_FUNCTIONS = "export FAKE_HELPER_LOADED=yes\n"


@pytest.fixture
def webhare_settings(tmp_path):
    """Settings pointing at a fake installation with a working `wh`."""
    whtree = tmp_path / "whtree"
    (whtree / "bin").mkdir(parents=True)
    (whtree / "lib").mkdir()

    wh = whtree / "bin" / "wh"
    wh.write_text(FAKE_WH)
    wh.chmod(0o755)
    (whtree / "lib" / "wh-functions.sh").write_text(FAKE_FUNCTIONS)

    dataroot = tmp_path / "whdata"
    dataroot.mkdir()
    scripts = tmp_path / "scripts"
    scripts.mkdir()

    return WebHareSettings(
        home=tmp_path,
        webhare_dir=whtree,
        webhare_dataroot=dataroot,
        temp_dir=scripts
    )


@pytest.fixture
def script_dir(webhare_settings):
    """Directory receiving the transient command scripts."""
    return webhare_settings.temp_dir


@pytest.fixture
def lenient_arguments():
    """Disable strict argument checking for one test."""
    previous = get_all_flags()['strict_arguments']
    set_flag('strict_arguments', False)
    yield
    set_flag('strict_arguments', previous)
