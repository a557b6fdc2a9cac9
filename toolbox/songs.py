import re
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple, Union

_PARTS = re.compile(r"\s*\.\s*")
_ITEMS = re.compile(r"\s*,\s*")


@dataclass(frozen=True)
class Song:
    name: str
    artist: str
    genre: str
    subgenre: Optional[str]
    tags: Tuple[str, ...]


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    # порядок первого появления
    return tuple(dict.fromkeys(values))


def parse_song(line: str, artist_tags: Mapping[str, Sequence[str]]) -> Song:
    """
    'My Favorite Things. John Coltrane. Jazz, Bebop. popular, cover'
      -> Song(name='My Favorite Things', artist='John Coltrane',
              genre='Jazz', subgenre='Bebop',
              tags=('popular', 'cover', 'jazz', 'bebop', <теги артиста>...))
    """
    parts = _PARTS.split(line.strip())
    if len(parts) < 3:
        raise ValueError(f"Malformed song line: {line!r}")

    name, artist, genres = parts[0], parts[1], parts[2]
    genre, *rest = _ITEMS.split(genres)
    subgenre = rest[0] if rest else None

    explicit = [t for t in _ITEMS.split(parts[3]) if t] if len(parts) > 3 else []
    derived = [genre.lower()] + ([subgenre.lower()] if subgenre else [])
    tags = _unique(explicit + derived + list(artist_tags.get(artist, ())))

    return Song(name=name, artist=artist, genre=genre, subgenre=subgenre, tags=tags)


# ============ Критерии поиска (замыкания) ============


def by_tags(tags: Union[str, Sequence[str]]) -> Callable[[Song], bool]:
    """
    Теги без '!' обязательны; песня с '!'-тегами отсеивается,
    только если у неё есть все они сразу:
    by_tags(['jazz', 'piano!']) - джаз без фортепиано
    by_tags(['piano!', 'bebop!']) - всё, кроме бибопа на фортепиано
    """
    tags = [tags] if isinstance(tags, str) else list(tags)
    wanted = tuple(t for t in tags if not t.endswith("!"))
    banned = tuple(t[:-1] for t in tags if t.endswith("!"))
    return lambda s: all(t in s.tags for t in wanted) and not (
        banned and all(t in s.tags for t in banned)
    )


def by_artist(artist: str) -> Callable[[Song], bool]:
    return lambda s: s.artist == artist


def by_name(name: str) -> Callable[[Song], bool]:
    return lambda s: s.name == name


class Collection:
    """Коллекция песен: одна песня на строку, пустые строки пропускаются"""

    def __init__(
        self, songs_text: str, artist_tags: Optional[Mapping[str, Sequence[str]]] = None
    ):
        artist_tags = artist_tags or {}
        self.songs: Tuple[Song, ...] = tuple(
            parse_song(line, artist_tags)
            for line in songs_text.splitlines()
            if line.strip()
        )

    def find(
        self,
        tags: Union[str, Sequence[str], None] = None,
        artist: Optional[str] = None,
        name: Optional[str] = None,
        filter: Optional[Callable[[Song], bool]] = None,
    ) -> Tuple[Song, ...]:
        """Все заданные критерии объединяются через AND; порядок песен сохраняется"""
        criteria = []
        if tags is not None:
            criteria.append(by_tags(tags))
        if artist is not None:
            criteria.append(by_artist(artist))
        if name is not None:
            criteria.append(by_name(name))
        if filter is not None:
            criteria.append(filter)

        return tuple(s for s in self.songs if all(c(s) for c in criteria))

    def __len__(self) -> int:
        return len(self.songs)
