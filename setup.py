import sys
major, minor, micro, releaselevel, serial = sys.version_info
if not (major == 3 and minor >= 10):
	print("Python >=3.10 is required to use this module.")
	sys.exit(1)

from setuptools import setup

import os.path

setup_dir = os.path.split(os.path.abspath(__file__))[0]
DOCUMENTATION = open(os.path.join(setup_dir, 'README.rst')).read()

version_path = os.path.join(setup_dir, 'mcrand', 'version.py')
globals_dict = {}
with open(version_path) as f:
	exec(f.read(), globals_dict)
VERSION = '.'.join([str(x) for x in globals_dict['VERSION']])

dependencies = ['numpy', 'scipy']

setup(
	name='mcrand',
	packages=['mcrand', 'mcrand.engines'],
	provides=['mcrand'],
	requires=dependencies,
	install_requires=dependencies,
	extras_require={'test': ['pytest'], 'docs': ['sphinx', 'furo']},
	python_requires='>=3.10',
	version=VERSION,
	author='Bogdan Opanchuk',
	author_email='bogdan@opanchuk.net',
	description='Pseudo-random number engines and distributions for Monte Carlo simulations',
	long_description=DOCUMENTATION,
	classifiers=[
		'Development Status :: 4 - Beta',
		'Intended Audience :: Developers',
		'Intended Audience :: Science/Research',
		'License :: OSI Approved :: MIT License',
		'Operating System :: OS Independent',
		'Programming Language :: Python :: 3',
		'Topic :: Scientific/Engineering :: Mathematics'
	]
)
