from datetime import datetime, timezone


def utcnow() -> datetime:
    # colunas DateTime sem tz: gravamos sempre UTC "naive"
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)
