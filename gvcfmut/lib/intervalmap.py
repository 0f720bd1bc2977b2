"""An ordered map from disjoint closed ranges of GenomicPositions to values.

Each contig keeps its ranges sorted by start offset in plain lists and we use bisect to find
things. Ranges never cross contigs, so a lookup only ever has to search one contig.

Invariant: on a contig no two stored ranges overlap. put refuses a range that would break this.
"""
from bisect import bisect_left, bisect_right
from collections import namedtuple

from gvcfmut.lib.position import contig_key


class ClosedRange(namedtuple('ClosedRange', ['start', 'end'])):
  __slots__ = ()

  @property
  def contig(self):
    return self.start.contig

  def __contains__(self, position):
    return position.contig == self.start.contig and self.start.pos <= position.pos <= self.end.pos

  def __str__(self):
    return '[{}, {}]'.format(self.start, self.end.pos)


def closed(start, end):
  if start.contig != end.contig:
    raise ValueError('Range can not span contigs: {} - {}'.format(start, end))
  if end.pos < start.pos:
    raise ValueError('Range end before start: {} - {}'.format(start, end))
  return ClosedRange(start, end)


class IntervalMap(object):
  def __init__(self):
    self._starts = {}   # contig -> [start offset, ...]
    self._entries = {}  # contig -> [(ClosedRange, value), ...] in the same order as _starts

  def __len__(self):
    return sum(len(v) for v in self._entries.values())

  def contigs(self):
    return sorted((c for c, v in self._entries.items() if v), key=contig_key)

  def _find(self, position):
    """Index of the entry containing this position, or None"""
    starts = self._starts.get(position.contig)
    if not starts:
      return None
    idx = bisect_right(starts, position.pos) - 1
    if idx >= 0 and self._entries[position.contig][idx][0].end.pos >= position.pos:
      return idx
    return None

  def get_entry(self, position):
    """Return (range, value) for the range containing position, or None"""
    idx = self._find(position)
    return None if idx is None else self._entries[position.contig][idx]

  def get(self, position):
    entry = self.get_entry(position)
    return None if entry is None else entry[1]

  def remove(self, rng):
    """Delete the entry stored under exactly this range. Does nothing if there is none"""
    starts = self._starts.get(rng.contig)
    if not starts:
      return
    idx = bisect_left(starts, rng.start.pos)
    if idx < len(starts) and self._entries[rng.contig][idx][0] == rng:
      del starts[idx]
      del self._entries[rng.contig][idx]

  def put(self, rng, value):
    """Bind value to rng. If rng is already stored its value is replaced.

    rng must not partly overlap any other stored range: remove those entries first.
    """
    starts = self._starts.setdefault(rng.contig, [])
    entries = self._entries.setdefault(rng.contig, [])
    lo, hi = self._overlap_slice(rng)
    if hi - lo == 1 and entries[lo][0] == rng:
      entries[lo] = (rng, value)
      return
    if hi > lo:
      raise ValueError('{} overlaps stored ranges {}'.format(
        rng, ', '.join(str(r) for r, _ in entries[lo:hi])))
    starts.insert(lo, rng.start.pos)
    entries.insert(lo, (rng, value))

  def _overlap_slice(self, rng):
    """(lo, hi) such that entries[lo:hi] are the stored entries overlapping rng"""
    starts = self._starts.get(rng.contig, [])
    entries = self._entries.get(rng.contig, [])
    lo = hi = bisect_right(starts, rng.end.pos)
    while lo > 0 and entries[lo - 1][0].end.pos >= rng.start.pos:
      lo -= 1
    return lo, hi

  def overlapping(self, rng):
    """List of (range, value) for every stored range that shares a position with rng, in order"""
    lo, hi = self._overlap_slice(rng)
    return list(self._entries.get(rng.contig, [])[lo:hi])

  def entries(self):
    """Generator over (range, value) in genomic order. Each call starts over from the beginning"""
    for contig in self.contigs():
      for entry in self._entries[contig]:
        yield entry

  def __iter__(self):
    return self.entries()
