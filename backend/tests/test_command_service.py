import io

import pytest

from travel_agency.models.errors import (
    CommandParseError,
    DateFormatError,
    NotApplicableError,
    RecordNotFoundError,
    UnsupportedActionError,
    UnsupportedTypeError,
    ValidationError,
)
from travel_agency.services.command_service import (
    INVALID_COMMAND,
    CommandProcessor,
    process_commands,
    process_lines,
)
from travel_agency.storage.registry import TravelRegistry

SUMMER = "insert(type=vacation;name=Summer;start-date=1-Jun-2024;end-date=10-Jun-2024;price=500;location=Varna)"
CITY = "insert(type=excursion;name=City;start-date=1-Jun-2024;end-date=3-Jun-2024;price=120;transport=bus)"
VITOSHA = "insert(type=destination;location=Sofia;landmark=Vitosha)"


@pytest.fixture
def processor() -> CommandProcessor:
    return CommandProcessor(TravelRegistry())


def test_insert_then_list_vacation():
    assert process_commands([SUMMER, "list()"]) == (
        "Vacation created.\n"
        " * Vacation: name=Summer,start-date=1-Jun-2024,end-date=10-Jun-2024,price=500.00,location=Varna\n"
    )


def test_delete_then_list_is_empty():
    assert process_lines([SUMMER, "delete(type=vacation;name=Summer)", "list()"]) == [
        "Vacation created.",
        "Vacation deleted.",
        "No results.",
    ]


def test_end_before_start_is_rejected_and_registry_stays_empty(processor):
    bad = "insert(type=excursion;name=Trip;start-date=10-Jun-2024;end-date=1-Jun-2024;price=100;transport=bus)"
    with pytest.raises(ValidationError):
        processor.execute(bad)
    assert processor.registry.travels == []

    assert process_lines([bad, "list()"]) == [INVALID_COMMAND, "No results."]


def test_add_destination_shows_under_excursion():
    results = process_lines(
        [VITOSHA, CITY, "add-destination(name=City;location=Sofia;landmark=Vitosha)", "list()"]
    )
    assert results == [
        "Destination created.",
        "Excursion created.",
        "Added destination to City.",
        " * Excursion: name=City,start-date=1-Jun-2024,end-date=3-Jun-2024,price=120.00,transport=bus\n"
        " ** Destinations: Destination: location=Sofia,landmark=Vitosha",
    ]


def test_cruise_insert_and_remove_destination(processor):
    processor.execute(VITOSHA)
    assert (
        processor.execute(
            "insert(type=cruise;name=Med;start-date=1-Aug-2024;end-date=8-Aug-2024;price=900;start-dock=Varna)"
        )
        == "Cruise created."
    )
    assert processor.execute("add-destination(name=Med;location=Sofia;landmark=Vitosha)") == "Added destination to Med."
    assert (
        processor.execute("remove-destination(name=Med;location=Sofia;landmark=Vitosha)")
        == "Removed destination from Med."
    )
    with pytest.raises(RecordNotFoundError):
        processor.execute("remove-destination(name=Med;location=Sofia;landmark=Vitosha)")


def test_destination_operations_require_excursion_family(processor):
    processor.execute(VITOSHA)
    processor.execute(SUMMER)
    with pytest.raises(NotApplicableError):
        processor.execute("add-destination(name=Summer;location=Sofia;landmark=Vitosha)")
    with pytest.raises(RecordNotFoundError):
        processor.execute("add-destination(name=Nobody;location=Sofia;landmark=Vitosha)")


def test_delete_destination_cascades(processor):
    processor.execute(VITOSHA)
    processor.execute(CITY)
    processor.execute("add-destination(name=City;location=Sofia;landmark=Vitosha)")
    processor.execute("add-destination(name=City;location=Sofia;landmark=Vitosha)")

    assert processor.execute("delete(type=destination;location=Sofia;landmark=Vitosha)") == "Destination deleted."
    assert processor.registry.destinations == []
    assert processor.execute("list()").endswith(" ** Destinations: -")


def test_delete_reports_the_removed_variant(processor):
    processor.execute(SUMMER)
    assert processor.execute("delete(type=cruise;name=Summer)") == "Vacation deleted."


def test_filter_all_sorts_and_filter_by_type_bounds_price(processor):
    processor.execute(SUMMER)
    processor.execute(CITY)
    processor.execute(
        "insert(type=vacation;name=Autumn;start-date=1-Sep-2024;end-date=5-Sep-2024;price=200;location=Sozopol)"
    )

    names = [line.split(",")[0] for line in processor.execute("filter(type=all)").split("\n") if line.startswith(" * ")]
    assert names == [" * Excursion: name=City", " * Vacation: name=Summer", " * Vacation: name=Autumn"]

    assert processor.execute("filter(type=Vacation;price-min=100;price-max=200)") == (
        " * Vacation: name=Autumn,start-date=1-Sep-2024,end-date=5-Sep-2024,price=200.00,location=Sozopol"
    )
    assert processor.execute("filter(type=cruise;price-min=0;price-max=1000)") == "No results."
    # insertion order is untouched by filtering
    assert [t.name for t in processor.registry.travels] == ["Summer", "City", "Autumn"]


def test_filter_all_ignores_unknown_keys(processor):
    processor.execute(SUMMER)
    output = processor.execute("filter(type=all;end-date=5-Jun-2024)")
    assert "name=Summer" in output


def test_negative_zero_price_renders_as_zero():
    results = process_lines(
        [
            "insert(type=vacation;name=Free;start-date=1-Jun-2024;end-date=2-Jun-2024;price=-0;location=Varna)",
            "list()",
        ]
    )
    assert results[1] == (
        " * Vacation: name=Free,start-date=1-Jun-2024,end-date=2-Jun-2024,price=0.00,location=Varna"
    )


def test_trailing_whitespace_after_command_is_ignored():
    assert process_lines([SUMMER + "  ", "list() \t"]) == [
        "Vacation created.",
        " * Vacation: name=Summer,start-date=1-Jun-2024,end-date=10-Jun-2024,price=500.00,location=Varna",
    ]


def test_destination_failures_leave_travel_unchanged(processor):
    processor.execute(VITOSHA)
    processor.execute(SUMMER)
    processor.execute(CITY)
    city = processor.registry.get_travel("City")

    with pytest.raises(NotApplicableError):
        processor.execute("remove-destination(name=Summer;location=Sofia;landmark=Vitosha)")
    with pytest.raises(RecordNotFoundError):
        processor.execute("add-destination(name=City;location=Sofia;landmark=Boyana)")
    assert city.destinations == []


@pytest.mark.parametrize(
    "line, error",
    [
        ("launch(type=all)", UnsupportedActionError),
        ("insert(type=hotel;name=x)", UnsupportedTypeError),
        ("delete(type=hotel;name=x)", UnsupportedTypeError),
        ("filter(type=destination;price-min=0;price-max=1)", UnsupportedTypeError),
        ("filter(type=vacation)", ValidationError),
        ("filter(type=vacation;price-min=abc;price-max=1)", ValidationError),
        ("filter()", ValidationError),
        ("insert(type=destination;location=Sofia)", ValidationError),
        ("insert(type=vacation;name=S;start-date=1-Jun-2024;end-date=2-Jun-2024;price=-5;location=V)", ValidationError),
        ("insert(type=vacation;name=S;start-date=1-Jun-2024;end-date=2-Jun-2024;price=abc;location=V)", ValidationError),
        ("insert(type=vacation;name=S;start-date=1-Jun-2024;end-date=2-Jun-2024;price=nan;location=V)", ValidationError),
        ("insert(type=vacation;name=S;start-date=01-Jun-2024;end-date=2-Jun-2024;price=5;location=V)", DateFormatError),
        ("insert(type=vacation;name=S;end-date=2-Jun-2024;price=5;location=V)", ValidationError),
        ("insert(type=vacation;name=S;start-date=1-Jun-2024;end-date=2-Jun-2024;price=5;location=V;accommodation=)", ValidationError),
        ("delete(type=vacation;name=Missing)", RecordNotFoundError),
        ("delete(type=destination;location=Sofia;landmark=Vitosha)", RecordNotFoundError),
        ("insert type=vacation", CommandParseError),
    ],
)
def test_failures_keep_distinct_types(processor, line, error):
    with pytest.raises(error):
        processor.execute(line)
    assert processor.registry.travels == []
    assert processor.registry.destinations == []


def test_failed_commands_do_not_stop_the_batch():
    output = process_commands(["", "bogus", SUMMER, "   ", "delete(type=vacation;name=Nope)", "list()"])
    assert output.split("\n") == [
        INVALID_COMMAND,
        "Vacation created.",
        INVALID_COMMAND,
        " * Vacation: name=Summer,start-date=1-Jun-2024,end-date=10-Jun-2024,price=500.00,location=Varna",
        "",
    ]


def test_batches_do_not_share_state():
    process_commands([SUMMER])
    assert process_commands(["list()"]) == "No results.\n"


def test_stdin_runner(monkeypatch, capsys):
    from travel_agency import __main__ as runner

    monkeypatch.setattr(runner, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{SUMMER}\n\nlist()\n"))
    runner.main()

    assert capsys.readouterr().out == (
        "Vacation created.\n"
        " * Vacation: name=Summer,start-date=1-Jun-2024,end-date=10-Jun-2024,price=500.00,location=Varna\n"
    )
