from unittest.mock import MagicMock

import pytest

from placetypes.domain.errors import NetworkError, PlacesTimeoutError
from placetypes.domain.models import Coordinate, NearbyTypesResult, SearchOutcome, TypeCount
from placetypes.scripts import cli
from placetypes.services.device_location import FixedLocationProvider, PermissionDeniedError


def _finder(result=None, exc=None):
    finder = MagicMock()
    if exc is not None:
        finder.find_nearby_place_types.side_effect = exc
    else:
        finder.find_nearby_place_types.return_value = result
    return finder


OK_RESULT = NearbyTypesResult(
    outcome=SearchOutcome.OK,
    types=[TypeCount("bar", 2), TypeCount("cafe", 1)],
    status="OK",
)


def test_types_prints_ranked_counts(capsys):
    finder = _finder(OK_RESULT)
    code = cli.main(["types", "--lat", "41.8781", "--lon", "-87.6298", "--type", "bar", "--type", "cafe"], finder=finder)

    assert code == cli.EXIT_OK
    finder.find_nearby_place_types.assert_called_once_with(
        Coordinate(41.8781, -87.6298), ["bar", "cafe"], limit=None
    )
    out = capsys.readouterr().out
    assert "Count: 2, Type: bar" in out
    assert out.index("Type: bar") < out.index("Type: cafe")


def test_types_with_provider_status_is_not_a_failure(capsys):
    finder = _finder(NearbyTypesResult(outcome=SearchOutcome.PROVIDER_STATUS, status="ZERO_RESULTS"))
    code = cli.main(["types", "--lat", "0", "--lon", "0"], finder=finder)
    assert code == cli.EXIT_OK
    assert "ZERO_RESULTS" in capsys.readouterr().out


def test_types_rejects_invalid_coordinate(capsys):
    finder = _finder(OK_RESULT)
    code = cli.main(["types", "--lat", "91", "--lon", "0"], finder=finder)
    assert code == cli.EXIT_BAD_INPUT
    finder.find_nearby_place_types.assert_not_called()
    assert "latitude" in capsys.readouterr().out


def test_types_requires_lon():
    with pytest.raises(SystemExit):
        cli.main(["types", "--lat", "10"], finder=_finder(OK_RESULT))


@pytest.mark.parametrize(
    "exc, label",
    [
        (NetworkError("refused"), "Network Failure"),
        (PlacesTimeoutError("stalled"), "Wait Timeout"),
    ],
)
def test_types_reports_transport_errors(capsys, exc, label):
    code = cli.main(["types", "--lat", "1", "--lon", "1"], finder=_finder(exc=exc))
    assert code == cli.EXIT_LOOKUP_FAILED
    assert label in capsys.readouterr().out


def test_types_here_uses_location_provider():
    finder = _finder(OK_RESULT)
    provider = FixedLocationProvider(Coordinate(5.0, 6.0))
    code = cli.main(["types", "--here", "--limit", "1"], finder=finder, provider=provider)
    assert code == cli.EXIT_OK
    finder.find_nearby_place_types.assert_called_once_with(Coordinate(5.0, 6.0), None, limit=1)


def test_types_here_without_fix(capsys):
    provider = MagicMock()
    provider.get_current_location.side_effect = PermissionDeniedError("Geolocation permission has not been granted.")
    code = cli.main(["types", "--here"], finder=_finder(OK_RESULT), provider=provider)
    assert code == cli.EXIT_LOOKUP_FAILED
    assert "permission" in capsys.readouterr().out


def test_locate_prints_location(capsys):
    code = cli.main(["locate"], finder=_finder(OK_RESULT), provider=FixedLocationProvider("1.5,2.5"))
    assert code == cli.EXIT_OK
    assert "Latitude: 1.5, Longitude 2.5" in capsys.readouterr().out


def test_open_in_browser_reports_failure(capsys):
    opener = MagicMock(return_value=False)
    assert cli.open_in_browser(Coordinate(1.5, 2.5), opener=opener) is False
    opener.assert_called_once_with("https://www.google.com/maps/search/?api=1&query=1.5%2C2.5")
    assert "Could not view this URL" in capsys.readouterr().out


def test_menu_entered_coordinate_then_exit(capsys):
    finder = _finder(OK_RESULT)
    answers = iter(["3", "41.8781", "-87.6298", "4"])
    code = cli.run_menu(finder, FixedLocationProvider(None), input_fn=lambda prompt: next(answers))
    assert code == cli.EXIT_OK
    finder.find_nearby_place_types.assert_called_once()
    assert "Count: 1, Type: cafe" in capsys.readouterr().out


def test_menu_invalid_entry_reprompts(capsys):
    finder = _finder(OK_RESULT)
    answers = iter(["3", "abc", "0", "2", "4"])
    code = cli.run_menu(finder, FixedLocationProvider(None), input_fn=lambda prompt: next(answers))
    assert code == cli.EXIT_OK
    finder.find_nearby_place_types.assert_not_called()
    out = capsys.readouterr().out
    assert "Invalid Latitude Entry" in out
    assert "No device location configured" in out


def test_menu_exits_on_eof():
    def raise_eof(prompt):
        raise EOFError

    assert cli.run_menu(_finder(OK_RESULT), FixedLocationProvider(None), input_fn=raise_eof) == cli.EXIT_OK


@pytest.mark.parametrize("flag", ["--radius", "--limit"])
@pytest.mark.parametrize("value", ["0", "-5"])
def test_types_rejects_non_positive_radius_and_limit(flag, value):
    finder = _finder(OK_RESULT)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["types", "--lat", "1", "--lon", "1", flag, value], finder=finder)
    assert excinfo.value.code == cli.EXIT_BAD_INPUT
    finder.find_nearby_place_types.assert_not_called()


def test_types_radius_overrides_finder():
    finder = _finder(OK_RESULT)
    cli.main(["types", "--lat", "1", "--lon", "1", "--radius", "250"], finder=finder)
    assert finder.radius_m == 250


def _answers_then_eof(*answers):
    pending = list(answers)

    def input_fn(prompt):
        if not pending:
            raise EOFError
        return pending.pop(0)

    return input_fn


def test_menu_eof_at_coordinate_prompt(capsys):
    finder = _finder(OK_RESULT)
    code = cli.run_menu(finder, FixedLocationProvider(None), input_fn=_answers_then_eof("3", "41.0"))
    assert code == cli.EXIT_OK
    finder.find_nearby_place_types.assert_not_called()
    assert "An empty input was given." in capsys.readouterr().out


def test_menu_eof_at_browser_prompt(capsys):
    code = cli.run_menu(
        _finder(OK_RESULT), FixedLocationProvider("1.5,2.5"), input_fn=_answers_then_eof("1")
    )
    assert code == cli.EXIT_OK
    assert "Latitude: 1.5, Longitude 2.5" in capsys.readouterr().out
