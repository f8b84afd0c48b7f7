from setuptools import setup, find_packages

setup(name='rotmath',
      version='1.0.0',
      description='Quaternion rotation math generic over the floating point precision',
      packages=find_packages(include=['rotmath', 'rotmath.*']),
      python_requires='>=3.10',
      install_requires=['numpy', 'pandas'],
      extras_require={'test': ['pytest', 'scipy']})
