import pytest

from mdadf.config import CONFIGURATION, ApplicationConfiguration


# NOTE: keep a config file or log file of the user from leaking into the tests.
@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    monkeypatch.setenv('MDADF_CONFIG_FILE', str(tmp_path / 'missing-config.yaml'))
    monkeypatch.setenv('MDADF_LOG_FILE', '')
    for variable in ('MDADF_LOG_LEVEL', 'MDADF_OUTPUT_FORMAT', 'MDADF_JSON_INDENT', 'MDADF_ENSURE_ASCII'):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture(autouse=True)
def mock_configuration(isolated_environment):
    config = ApplicationConfiguration(
        log_file='',
        log_level='WARNING',
        output_format='json',
        json_indent=None,
        ensure_ascii=False,
    )

    token = CONFIGURATION.set(config)

    yield config

    CONFIGURATION.reset(token)


@pytest.fixture
def work_item_markdown_description():
    return """# Release checklist

Prepare the **release** of `mdadf` and ping [the team](https://example.com/team).
See https://example.com/docs for ~~old~~ *new* notes.

## Steps

1. Bump the version
2. Run the tests
   1. unit
   2. integration

- Publish
  - PyPI
  - Changelog

> Remember to tag
> the release commit

| Task | Owner |
|:-----|------:|
| Build | **Ann** |
| Ship |  |

```bash
make release
make publish
```

---

Done."""
