import logging
import numpy as np
import polyspline

logging.basicConfig(level = logging.DEBUG)

# Two cubic segments in two outputs: start at rest, pass through a waypoint, end at rest.
problem = polyspline.SplineProblem([0.0, 1.0, 3.0], 4, 2, metadata = dict(Name = 'two segment'))
problem.add_constant_constraint(0, 1, [0.0, 0.0])
problem.add_constant_constraint(0, 0, [5.0, 7.0])
problem.add_constant_constraint(1, 0, [6.0, 8.0])
problem.add_continuity_constraint(1, 1)
problem.add_continuity_constraint(1, 2)
problem.add_constant_constraint(2, 0, [0.0, 2.0])
problem.add_constant_constraint(2, 1, [0.0, 0.0])
problem.fit()

for segment, (polynomial, duration) in enumerate(zip(problem.segment_polynomials(), problem.durations())):
    print(f"segment {segment}: duration {duration}, coefficients\n{polynomial.c.T}")

ts = np.arange(problem.times[0], problem.times[-1] + 1.0e-3, 0.05)
values = problem.sample(ts)
with open('two_segment.csv', 'w', encoding='utf-8') as file:
    for t, value in zip(ts, values):
        file.write(f"{t}\t{value[0]}\t{value[1]}\t{problem.segment_index(t)}\n")

problem.save('two_segment.json')
