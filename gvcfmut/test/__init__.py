import os

example_data_dir = os.path.join(os.path.dirname(__file__), 'data')
