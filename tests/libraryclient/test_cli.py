import orjson
import pytest
from typer.testing import CliRunner

from libraryclient import __version__
from libraryclient.libraryctl.__main__ import app

from .test_aioclient import CONTAINER_ID, ENTITY, IMAGE_ID


@pytest.fixture
def runner(server):
    yield CliRunner(env={'LIBRARYCLIENT_REMOTE_URL': server.url})


def test_version(runner: CliRunner):
    res = runner.invoke(app, 'version', catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == __version__


def test_get_entity_yaml(runner: CliRunner, server):
    server.respond('GET', '/v1/entities/alice', 200, {'data': ENTITY})

    res = runner.invoke(app, ['get', 'entity', 'alice'], catch_exceptions=False)

    assert res.exit_code == 0
    assert 'name: alice' in res.stdout


def test_get_image_not_found(runner: CliRunner):
    res = runner.invoke(app, ['get', 'image', 'alice/default/busybox:nope'], catch_exceptions=False)

    assert res.exit_code == 0
    assert res.stdout.strip() == 'Image alice/default/busybox:nope not found'


def test_get_error_exits_nonzero(runner: CliRunner, server):
    server.respond('GET', '/v1/entities/alice', 500, {'error': {'code': 500, 'message': 'boom'}})

    res = runner.invoke(app, ['get', 'entity', 'alice'])

    assert res.exit_code == 1


def test_search_json(runner: CliRunner, server):
    results = {'entity': [ENTITY], 'collection': [], 'container': [], 'image': []}
    server.respond('GET', '/v1/search', 200, {'data': results})

    res = runner.invoke(app, ['search', 'ali ce', '-o', 'json'], catch_exceptions=False)

    assert res.exit_code == 0
    assert orjson.loads(res.stdout) == results
    assert server.requests[0].query == {'value': 'ali ce'}


def test_tags(runner: CliRunner, server):
    server.respond('GET', f'/v1/tags/{CONTAINER_ID}', 200, {'data': {'latest': IMAGE_ID}})

    res = runner.invoke(app, ['tags', CONTAINER_ID, '-o', 'json'], catch_exceptions=False)

    assert res.exit_code == 0
    assert orjson.loads(res.stdout) == {'latest': IMAGE_ID}


def test_tag(runner: CliRunner, server):
    server.respond('GET', f'/v1/tags/{CONTAINER_ID}', 200, {'data': {}})
    server.respond('POST', f'/v1/tags/{CONTAINER_ID}', 200)

    res = runner.invoke(app, ['tag', CONTAINER_ID, IMAGE_ID, 'v1', 'latest'], catch_exceptions=False)

    assert res.exit_code == 0
    posts = server.requests_to('POST', f'/v1/tags/{CONTAINER_ID}')
    assert [r.json for r in posts] == [{'tag': 'v1', 'imageID': IMAGE_ID}, {'tag': 'latest', 'imageID': IMAGE_ID}]


def test_tag_invalid_image(runner: CliRunner, server):
    res = runner.invoke(app, ['tag', CONTAINER_ID, 'not-an-id', 'v1'])

    assert res.exit_code == 1
    assert server.requests == []


def test_config_location(runner: CliRunner, config_dir: str):
    res = runner.invoke(app, ['config', 'config-location'], catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == f'Default settings: {config_dir}/libraryclient/config.ini'


def test_config_list_empty_config(runner: CliRunner):
    res = runner.invoke(app, ['config', 'list'], catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == ''


@pytest.mark.parametrize(
    'name,value',
    [
        ('remote/url', 'https://library.example.org'),
        ('remote/token', 'abc.def.ghi'),
        ('http/timeout_in_seconds', '12.5'),
    ],
)
def test_config_set_get_list_unset(name: str, value: str, runner: CliRunner, config_dir: str):
    res = runner.invoke(app, ['config', 'set', name, value], catch_exceptions=False)
    assert res.exit_code == 0

    res = runner.invoke(app, ['config', 'list'], catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == f'Config settings from {config_dir}/libraryclient/config.ini:\n{name}={value}'

    res = runner.invoke(app, ['config', 'get', name], catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == value

    res = runner.invoke(app, ['config', 'unset', name], catch_exceptions=False)
    assert res.exit_code == 0

    res = runner.invoke(app, ['config', 'list'], catch_exceptions=False)
    assert res.exit_code == 0
    assert res.stdout.strip() == ''


@pytest.mark.parametrize(
    'name,value',
    [
        ('remote/url', 'library.example.org'),
        ('remote/token', 'has space'),
        ('http/timeout_in_seconds', '0'),
        ('http/timeout_in_seconds', 'abc'),
    ],
)
def test_config_set_bad_value(name: str, value: str, runner: CliRunner):
    res = runner.invoke(app, ['config', 'set', name, value])
    assert res.exit_code == 1
    assert 'bad value' in res.output


def test_config_set_negative_timeout(runner: CliRunner):
    res = runner.invoke(app, ['config', 'set', 'http/timeout_in_seconds', '--', '-1'])
    assert res.exit_code == 1
    assert 'bad value' in res.output


def test_bad_timeout_in_environment_fails_cleanly(runner: CliRunner):
    res = runner.invoke(app, ['get', 'entity', 'alice'], env={'LIBRARYCLIENT_HTTP_TIMEOUT_IN_SECONDS': 'abc'})
    assert res.exit_code == 1
    assert 'invalid http/timeout_in_seconds' in res.output


def test_config_set_unknown_parameter(runner: CliRunner):
    res = runner.invoke(app, ['config', 'set', 'remote/nope', 'x'])
    assert res.exit_code != 0
