from setuptools import setup, find_packages

with open('long_description.rst') as f:
  ld = f.read()

__version__ = eval(open('gvcfmut/version.py').read().split('=')[1])
setup(
  name='gvcfmut',
  version=__version__,
  description='Overlay donor gVCF variants onto a base gVCF',
  long_description=ld,
  keywords=['genomics', 'gvcf', 'vcf', 'variants', 'simulation'],
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Science/Research',
    'Topic :: Scientific/Engineering :: Bio-Informatics',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3',
  ],
  python_requires='>=3.6',
  packages=find_packages(include=['gvcfmut*']),
  include_package_data=True,
  package_data={'gvcfmut.test': ['data/*']},
  entry_points={'console_scripts': ['gvcfmut = gvcfmut.cli:cli']},
  install_requires=[
    'setuptools>=24.3.0',
    'click>=7.0',
    'pysam>=0.15.0',
  ],
  extras_require={'test': ['pytest']},
)
