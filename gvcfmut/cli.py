import logging

import click

from gvcfmut.version import __version__


logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', type=int, default=0)
@click.option('--log-file', type=click.Path(), help='Write log messages to this file instead of stderr')
def cli(verbose, log_file):
  """Overlay the variants of one gVCF onto another"""
  logging.basicConfig(
    filename=log_file,
    format='%(asctime)s %(levelname)-5s %(name)s - %(message)s',
    level=[
      logging.ERROR,
      logging.WARNING,
      logging.INFO,
      logging.DEBUG
    ][min(verbose, 3)])
  logger.debug('gvcfmut version {}'.format(__version__))


@cli.command('mutate-assemblies', short_help='Overlay donor gVCF variants onto a base gVCF')
@click.option('--base-gvcf', '--founder-gvcf', 'base_gvcf', required=True,
              type=click.Path(exists=True, dir_okay=False), help='gVCF to mutate (.g.vcf or .g.vcf.gz)')
@click.option('--donor-gvcf', '--non-founder-gvcf', 'donor_gvcf', required=True,
              type=click.Path(exists=True, dir_okay=False), help='gVCF to pull variants from (.g.vcf or .g.vcf.gz)')
@click.option('--output-dir', required=True, type=click.Path(file_okay=False), help='Output directory')
def mutate_assemblies(base_gvcf, donor_gvcf, output_dir):
  """Add the variants of the donor gVCF to the base gVCF and write the result to
  <output-dir>/<sample>_mutated.g.vcf, where <sample> is the single sample of the base.

  \b
  Donor records are applied in file order:
    - reference blocks are ignored
    - a donor record replaces a base SNP
    - a donor SNP or insertion splits a base reference block
    - indels on indels and other overlaps are skipped (see describe-outcomes)
  """
  import gvcfmut.mutate as mut
  fname, stats = mut.main(base_gvcf, donor_gvcf, output_dir)
  logger.info(', '.join('{}: {}'.format(k, stats[k]) for k, _ in mut.OUTCOMES))
  click.echo(fname)


@cli.command('describe-outcomes')
def describe_outcomes():
  """Explain what can happen to a donor record"""
  from gvcfmut.mutate import OUTCOMES
  for k, desc in OUTCOMES:
    click.echo('{}:\n  {}'.format(k, desc))
