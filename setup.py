"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='lamb-lang',
	author='Beth Kjos',
	author_email='kjosib@gmail.com',
	version='0.1.0',
	packages=['lamb', "lamb.tree_walker", ],
	license='MIT',
	description='Type inference and evaluation for a small, statically-typed, higher-order expression language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Education",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		'test': ["pytest"],
	},
)
