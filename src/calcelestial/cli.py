"""CLI entry point: rise, set, transit, and position of a celestial object.

Examples:
    calcelestial -p sun -m rise -q Berlin
    calcelestial -p moon -m transit -a 52.5 -o 13.4 -f "%H:%M §az"
"""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from datetime import datetime, timezone, tzinfo
from pathlib import Path

from dotenv import load_dotenv

from calcelestial import __version__, config
from calcelestial.compute import (
    compute_position,
    compute_rise_set_transit,
    engine_version,
)
from calcelestial.formatter import DEFAULT_TEMPLATE, format_result, parse_timezone
from calcelestial.geocode import GeocodingError, geocode_place
from calcelestial.models import (
    CelestialObject,
    Coordinates,
    Moment,
    ObjectDetails,
    ObserverPosition,
    Request,
    RiseSetTransit,
)
from calcelestial.objects import (
    SOLAR_STANDARD_HORIZON,
    horizon_from_name,
    object_from_name,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CIRCUMPOLAR = 2

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

RiseSetTransitFn = Callable[
    [CelestialObject, datetime, float, ObserverPosition, tzinfo | None], RiseSetTransit
]
PositionFn = Callable[[CelestialObject, datetime, ObserverPosition], Coordinates]
GeocodeFn = Callable[[str], ObserverPosition]


class CircumpolarError(Exception):
    """The requested horizon crossing does not happen on the searched day."""


class _ParseError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports syntax errors instead of exiting."""

    def error(self, message: str):  # type: ignore[override]
        raise _ParseError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the option parser. Values stay text and are validated by parse_request."""
    parser = _Parser(
        prog="calcelestial",
        description=(
            "Calculate rise, set, transit, and position of the sun, moon, and planets."
        ),
        epilog="A combination of --lat and --lon, or --query, is required.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-p",
        "--object",
        metavar="NAME",
        help="calculate for given object/planet (sun, moon, uranus, ...)",
    )
    parser.add_argument(
        "-H",
        "--horizon",
        metavar="TWILIGHT",
        help="rise/set with given twilight (nautic, civil, astronomical) or degrees",
    )
    parser.add_argument(
        "-t",
        "--time",
        metavar="TIME",
        help='calculate with given time (eg. "2011-12-25 18:00:00")',
    )
    parser.add_argument(
        "-m",
        "--moment",
        metavar="MOMENT",
        help="use rise/set/transit time for position calculation (default: now)",
    )
    parser.add_argument(
        "-f",
        "--format",
        metavar="FORMAT",
        help=(
            "output format (see strftime (3)); "
            "§az §alt §ra §dec §dist §jd §lat §lon §place §obj"
        ),
    )
    parser.add_argument(
        "-a",
        "--lat",
        metavar="DEG",
        help="geographical latitude (-90° to 90°)",
    )
    parser.add_argument(
        "-o",
        "--lon",
        metavar="DEG",
        help="geographical longitude (-180° to 180°)",
    )
    parser.add_argument(
        "-q",
        "--query",
        metavar="PLACE",
        help="look up geographical position by name",
    )
    parser.add_argument(
        "-z",
        "--timezone",
        metavar="TZ",
        help="use timezone for output (hours, zone name, or auto)",
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="print debug information"
    )
    parser.add_argument("-h", "--help", action="store_true", help="show this help")
    parser.add_argument("-v", "--version", action="store_true", help="show version")
    return parser


def _configure_logging(debug: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --debug or CALCELESTIAL_LOG)."""
    level = logging.DEBUG if debug else logging.WARNING
    env_level = config.get_log_level()
    if env_level:
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _short_circuit(argv: Sequence[str]) -> str | None:
    """First of --help/--version on the command line, for use when parsing failed."""
    for token in argv:
        if token == "--":
            break
        if token in ("-h", "--help"):
            return "help"
        if token in ("-v", "--version"):
            return "version"
    return None


def _parse_float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _localize(naive: datetime, tz: tzinfo | None) -> datetime:
    """Attach tz (None = system local time) to a naive datetime and convert to UTC."""
    if tz is None:
        return naive.astimezone(timezone.utc)
    if hasattr(tz, "localize"):
        return tz.localize(naive).astimezone(timezone.utc)
    return naive.replace(tzinfo=tz).astimezone(timezone.utc)


def parse_request(
    args: argparse.Namespace,
    alias: str | None = None,
    geocode: GeocodeFn | None = None,
) -> tuple[Request | None, list[str]]:
    """Validate parsed options into a Request.

    Every problem is collected; nothing is raised for bad input.

    Args:
        args: Namespace from build_parser().
        alias: Name the program was invoked as; selects the object when
            --object is not given.
        geocode: Place-name lookup used for --query (default: geocode_place).

    Returns:
        (request, errors). request is None whenever errors is non-empty.
    """
    errors: list[str] = []

    obj = object_from_name(alias)
    if args.object is not None:
        obj = object_from_name(args.object, aliases=False)

    horizon = SOLAR_STANDARD_HORIZON
    if args.horizon is not None:
        try:
            horizon = horizon_from_name(args.horizon)
        except ValueError:
            errors.append(f"invalid twilight: {args.horizon}")

    moment = Moment.NOW
    if args.moment is not None:
        try:
            moment = Moment(args.moment)
        except ValueError:
            errors.append(f"invalid moment: {args.moment}")

    naive_time: datetime | None = None
    if args.time is not None:
        try:
            naive_time = datetime.strptime(args.time, TIME_FORMAT)
        except ValueError:
            errors.append(f"invalid date: {args.time}")

    lat = lng = None
    if args.lat is not None:
        lat = _parse_float(args.lat)
        if lat is None:
            errors.append(f"invalid latitude: {args.lat}")
    if args.lon is not None:
        lng = _parse_float(args.lon)
        if lng is None:
            errors.append(f"invalid longitude: {args.lon}")

    if obj is None:
        errors.append("invalid object")

    position = ObserverPosition(lat=lat, lng=lng)
    has_coords = args.lat is not None or args.lon is not None
    if args.query is not None and has_coords:
        errors.append("conflicting position: use either --lat/--lon or --query")
    elif args.query is not None:
        try:
            position = (geocode or geocode_place)(args.query)
        except GeocodingError as e:
            logger.debug("lookup failed: %s", e)
            errors.append(f"failed to lookup location: {args.query}")
    elif not has_coords:
        errors.append("missing position: use --lat and --lon or --query")
    elif args.lat is None:
        errors.append("missing latitude")
    elif args.lon is None:
        errors.append("missing longitude")

    if position.lat is not None and not -90 <= position.lat <= 90:
        errors.append("invalid latitude")
    if position.lng is not None and not -180 <= position.lng <= 180:
        errors.append("invalid longitude")

    tz: tzinfo | None = None
    if args.timezone is not None:
        try:
            tz = parse_timezone(args.timezone, position)
        except ValueError as e:
            logger.debug("timezone: %s", e)
            errors.append(f"invalid timezone: {args.timezone}")

    if errors:
        return None, errors

    instant = datetime.now(timezone.utc)
    if naive_time is not None:
        instant = _localize(naive_time, tz)

    request = Request(
        obj=obj,  # type: ignore[arg-type]
        horizon=horizon,
        instant=instant,
        moment=moment,
        position=position,
        tz=tz,
        template=args.format if args.format is not None else DEFAULT_TEMPLATE,
    )
    return request, []


def resolve_moment(request: Request, rst: RiseSetTransit) -> datetime:
    """Pick the instant to report according to the requested moment.

    Raises:
        CircumpolarError: If the object does not cross the horizon and a
            rise/set/transit moment was requested, or the requested event
            is missing on that day.
    """
    if request.moment is Moment.NOW:
        return request.instant
    if rst.circumpolar:
        raise CircumpolarError("object is circumpolar")
    selected = {
        Moment.RISE: rst.rise,
        Moment.SET: rst.set,
        Moment.TRANSIT: rst.transit,
    }[request.moment]
    if selected is None:
        raise CircumpolarError(f"object has no {request.moment.value} on this day")
    return selected


def run(
    request: Request,
    rise_set_transit: RiseSetTransitFn | None = None,
    position_of: PositionFn | None = None,
) -> str:
    """Compute rise/set/transit, select the moment, locate the object, and format it.

    Raises:
        CircumpolarError: See resolve_moment.
    """
    logger.debug("calculate for: %s", request.instant.strftime(TIME_FORMAT + " UTC"))
    logger.debug("for position: %s, %s", request.position.lat, request.position.lng)
    logger.debug("for object: %s", request.obj.value)
    logger.debug("with horizon: %f", request.horizon)
    logger.debug("with timezone: %s", request.tz or "local")

    rst = (rise_set_transit or compute_rise_set_transit)(
        request.obj, request.instant, request.horizon, request.position, request.tz
    )
    logger.debug("rise/set/transit: %s", rst)
    instant = resolve_moment(request, rst)

    coordinates = (position_of or compute_position)(
        request.obj, instant, request.position
    )
    details = ObjectDetails(
        obj=request.obj,
        instant=instant,
        position=request.position,
        coordinates=coordinates,
    )
    return format_result(request.template, details, request.tz)


def main(
    argv: Sequence[str] | None = None,
    alias: str | None = None,
    geocode: GeocodeFn | None = None,
    rise_set_transit: RiseSetTransitFn | None = None,
    position_of: PositionFn | None = None,
) -> int:
    """Parse arguments, compute, and print the result.

    Returns:
        0 on success, 1 on invalid input, 2 when the object is circumpolar.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    errors: list[str] = []
    try:
        args, extras = parser.parse_known_args(argv)
    except _ParseError as e:
        action = _short_circuit(argv)
        if action == "help":
            print(parser.format_help(), end="")
            return EXIT_SUCCESS
        if action == "version":
            _print_version()
            return EXIT_SUCCESS
        print(e, file=sys.stderr)
        print(file=sys.stderr)
        print(parser.format_help(), end="", file=sys.stderr)
        return EXIT_FAILURE

    if args.help:
        print(parser.format_help(), end="")
        return EXIT_SUCCESS
    if args.version:
        _print_version()
        return EXIT_SUCCESS

    _configure_logging(args.debug)

    for token in extras:
        if token.startswith("-"):
            errors.append(f"unrecognized option: {token}")
        else:
            errors.append(f"unexpected argument: {token}")

    request, parse_errors = parse_request(args, alias=alias, geocode=geocode)
    errors.extend(parse_errors)
    if errors or request is None:
        for message in errors:
            print(message, file=sys.stderr)
        print(file=sys.stderr)
        print(parser.format_help(), end="", file=sys.stderr)
        return EXIT_FAILURE

    try:
        line = run(request, rise_set_transit=rise_set_transit, position_of=position_of)
    except CircumpolarError as e:
        print(e, file=sys.stderr)
        return EXIT_CIRCUMPOLAR

    print(line)
    return EXIT_SUCCESS


def _print_version() -> None:
    print(f"calcelestial {__version__}")
    print(f"skyfield {engine_version()}")


def entry() -> None:
    """Console script: reads .env and passes the invocation name as object alias."""
    load_dotenv()
    sys.exit(main(sys.argv[1:], alias=Path(sys.argv[0]).name))


if __name__ == "__main__":
    entry()
