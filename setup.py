#!/usr/bin/python

from setuptools import setup

setup(name="hsets",
      version="1.0.0",
      description="computer-assisted proofs of travelling waves in the "
                  "FitzHugh-Nagumo equations with isolating segments",
      author="Jack Hall",
      author_email="jackwhall7@gmail.com",
      license="GNU-GPLv3",
      python_requires=">=3.7",
      install_requires=["numpy", "scipy", "mpmath", "matplotlib"],
      extras_require={"test": ["pytest"]},
      packages=["hsets"],
      entry_points={"console_scripts": ["hsets-proof=hsets.cli:main"]},
      )
