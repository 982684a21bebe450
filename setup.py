from setuptools import setup

setup(name='restartpgm',
      version='0.1',
      description='Learn Bayesian network structures from discrete data by repeated random-restart hill climbing',
      license='MIT',
      packages=['restartpgm', 'restartpgm.external', 'restartpgm.tests'],
      install_requires=[
          'scipy >= 1.0',
          'numpy >= 1.17.0',
          'pandas >= 1.0',
          'networkx >= 2.1',
          'pgmpy >= 1.0.0, < 1.3'
      ],
      extras_require={
          'test': ['pytest'],
      },
      classifiers=[
          "Programming Language :: Python :: 3",
          "Intended Audience :: Developers",
          "Operating System :: Unix",
          "Operating System :: POSIX",
          "Operating System :: Microsoft :: Windows",
          "Operating System :: MacOS",
          "Topic :: Scientific/Engineering"
      ],
      zip_safe=False)
