import setuptools

setuptools.setup(
	name='erd-tools',
	version='0.1.0',
	packages=[
		'erdtools',
		'erdtools.erd',
		'erdtools.peg',
		'erdtools.support',
	],
	description='A backtracking PEG engine and a parser for a small entity-relationship diagram language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
	],
)
