from routeflow.types.result import Err, Ok


def _describe(result) -> str:
    match result:
        case Ok(value):
            return f"ok:{value}"
        case Err(error):
            return f"err:{error}"
    return "unknown"


def test_match_on_variants() -> None:
    assert _describe(Ok(3)) == "ok:3"
    assert _describe(Err("bad")) == "err:bad"


def test_flags_and_equality() -> None:
    assert Ok(1).is_ok and not Err("x").is_ok
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
