import matplotlib

# Tests run without a display
matplotlib.use('Agg')
