"""A coordinate on the genome: contig name plus a 1-based offset.

Positions on the same contig order by offset. Positions on different contigs order by
their contig names, with a leading 'chr' (any case) stripped so that chr2 sorts before chr10.
"""
from functools import cmp_to_key


def _contig_number(contig):
  stripped = contig.strip()
  if stripped[:3].lower() == 'chr':
    stripped = stripped[3:]
  try:
    return int(stripped.strip())
  except ValueError:
    return None


def compare_contigs(c1, c2):
  """Three way compare of two contig names. Returns < 0, 0 or > 0

  :param c1:
  :param c2:
  :return:
  """
  if c1 == c2:
    return 0
  n1, n2 = _contig_number(c1), _contig_number(c2)
  if n1 is not None and n2 is not None and n1 != n2:
    return n1 - n2
  return (c1 > c2) - (c1 < c2)


contig_key = cmp_to_key(compare_contigs)


class GenomicPosition(object):
  __slots__ = ('_contig', '_pos')

  def __init__(self, contig, pos):
    if pos < 1:
      raise ValueError('Positions are 1-based. Got {}:{}'.format(contig, pos))
    self._contig = contig
    self._pos = pos

  @property
  def contig(self):
    return self._contig

  @property
  def pos(self):
    return self._pos

  def shifted(self, delta):
    return GenomicPosition(self._contig, self._pos + delta)

  def _cmp(self, other):
    if self._contig == other._contig:
      return (self._pos > other._pos) - (self._pos < other._pos)
    return compare_contigs(self._contig, other._contig)

  def __eq__(self, other):
    if not isinstance(other, GenomicPosition):
      return NotImplemented
    return self._contig == other._contig and self._pos == other._pos

  def __ne__(self, other):
    res = self.__eq__(other)
    return res if res is NotImplemented else not res

  def __lt__(self, other):
    return self._cmp(other) < 0

  def __le__(self, other):
    return self._cmp(other) <= 0

  def __gt__(self, other):
    return self._cmp(other) > 0

  def __ge__(self, other):
    return self._cmp(other) >= 0

  def __hash__(self):
    return hash((self._contig, self._pos))

  def __str__(self):
    return '{}:{}'.format(self._contig, self._pos)

  def __repr__(self):
    return 'GenomicPosition({!r}, {})'.format(self._contig, self._pos)
