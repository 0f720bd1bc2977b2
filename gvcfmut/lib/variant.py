"""Two kinds of records live in the variant map:

  RefBlock      - a run of bases matching the reference. The REF is the single anchor base and the
                  ALT is the <NON_REF> symbol
  CalledVariant - everything else: SNPs, insertions, deletions and multi-allelic sites (ALT is kept
                  as the comma joined string)

Which class a record gets is decided purely by its alleles, see make_variant.
"""
from collections import namedtuple

NON_REF = '<NON_REF>'

# INFO fields carrying the assembly coordinates of a record. We never compute these, only carry them
ASM_FIELDS = ('ASM_Chr', 'ASM_Start', 'ASM_End', 'ASM_Strand')


_VariantFields = namedtuple('_VariantFields', ['start', 'end', 'ref', 'alt', 'is_donor', 'asm'])


class SimpleVariant(_VariantFields):
  """Base for the two record kinds. Immutable.

  Two records are equal when start, end, ref and alt match. Where the record came from (is_donor)
  and any assembly annotations (asm) are not part of its identity.
  """
  __slots__ = ()

  def __new__(cls, start, end, ref, alt, is_donor=False, asm=None):
    if start.contig != end.contig:
      raise ValueError('Record can not span contigs: {} - {}'.format(start, end))
    if end.pos < start.pos:
      raise ValueError('Record end before start: {} - {}'.format(start, end))
    return super(SimpleVariant, cls).__new__(cls, start, end, ref, alt, is_donor, asm or ())

  @property
  def contig(self):
    return self.start.contig

  @property
  def is_ref_block(self):
    return False

  @property
  def is_snp(self):
    return self.start == self.end

  @property
  def is_indel(self):
    return False

  def identity(self):
    return self.start, self.end, self.ref, self.alt

  def __eq__(self, other):
    if not isinstance(other, SimpleVariant):
      return NotImplemented
    return self.identity() == other.identity()

  def __ne__(self, other):
    res = self.__eq__(other)
    return res if res is NotImplemented else not res

  def __hash__(self):
    return hash(self.identity())

  def __repr__(self):
    return '{}({}-{} {} -> {}{})'.format(
      self.__class__.__name__, self.start, self.end.pos, self.ref, self.alt, ' donor' if self.is_donor else '')


class RefBlock(SimpleVariant):
  __slots__ = ()

  @property
  def is_ref_block(self):
    return True


class CalledVariant(SimpleVariant):
  __slots__ = ()

  @property
  def is_indel(self):
    # Anything that is not a single base substitution
    return len(self.ref) != 1 or len(self.alt) != 1


def is_ref_block_alleles(ref, alt):
  return len(ref) == 1 and alt == NON_REF


def make_variant(start, end, ref, alt, is_donor=False, asm=None):
  """Build the right kind of record for these alleles

  :param start: GenomicPosition
  :param end: GenomicPosition (inclusive)
  :param ref: reference allele
  :param alt: alternate allele(s), comma joined
  :param is_donor: True if this record was taken from the donor
  :param asm: tuple of (key, value) pairs for the ASM_* INFO fields
  :return: RefBlock or CalledVariant
  """
  cls = RefBlock if is_ref_block_alleles(ref, alt) else CalledVariant
  return cls(start, end, ref, alt, is_donor=is_donor, asm=asm)


def ref_block(start, end, ref):
  """Reference block that did not come from the donor and carries no assembly annotations"""
  return RefBlock(start, end, ref, NON_REF)
