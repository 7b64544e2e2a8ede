from setuptools import setup

setup(name='fedora-dists',
      version='0.1',
      description='Fedora, EPEL and RHEL release identifiers and the names derived from them',
      license='GPL-3.0-or-later',
      packages=['fedora_dists'],
      python_requires='>=3.10',
      install_requires=[
          'click',
          'requests',
          'PyYAML',
          'urllib3',
      ],
      extras_require={
          'test': [
              'flake8',
              'flake8-import-order',
              'pytest',
              'pytest-cov',
              'responses',
          ],
      },
      entry_points={
          'console_scripts': [
              'fedora-dists=fedora_dists.cli:cli',
          ],
      })
