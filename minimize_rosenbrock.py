import sys
import numpy as np

from simplexmin import NelderMeadOptimizer, MaxIterationsExceeded, setup_logging
from simplexmin.utils import rosenbrock

argc = len(sys.argv)
if argc < 2:
    print('Usage python %s x1 [x2 ...]' % sys.argv[0])
    exit(1)

x0 = np.array([float(v) for v in sys.argv[1:]])
if x0.size < 2:
    print('Rosenbrock needs at least two coordinates')
    exit(1)

setup_logging('nelder-mead.log')

opt = NelderMeadOptimizer(rosenbrock, function_tolerance=1e-10, max_evaluations=20000,
                          track_history=True, verbose=True)
try:
    opt.optimize(x0, delta=0.5)
except MaxIterationsExceeded as e:
    print('Not converged:', e)
    exit(2)

print('best position:', opt.best_position)
print('best fitness: %.6e' % opt.best_fitness)
print('evaluations:', opt.evaluations)
print('iterations:', len(opt.convergence_curve))
