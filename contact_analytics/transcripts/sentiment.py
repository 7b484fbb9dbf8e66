"""Join per-phrase sentiment annotations onto phrases."""

from ..models.transcript import Phrase, Transcript

SENTIMENT_LABELS = {1: "Positive", 0: "Neutral", -1: "Negative"}


def sentiment_index(transcript: Transcript) -> dict[int, int | None]:
    """Map phraseIndex to sentiment; the first entry for an index wins."""
    index: dict[int, int | None] = {}
    if transcript.analytics is None:
        return index
    for entry in transcript.analytics.sentiment:
        if entry.phrase_index is not None and entry.phrase_index not in index:
            index[entry.phrase_index] = entry.sentiment
    return index


def sentiment_for(phrase: Phrase, index: dict[int, int | None]) -> int | None:
    """Sentiment of a phrase, or None when no annotation exists."""
    if phrase.phrase_index is None:
        return None
    return index.get(phrase.phrase_index)


def friendly_sentiment(sentiment: int | None) -> str:
    return SENTIMENT_LABELS.get(sentiment, "") if sentiment is not None else ""
