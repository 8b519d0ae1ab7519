# rockbase

Common value types for robotics software, built on numpy.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `rockbase.timestamp`: `Time`, a frozen, ordered timestamp or duration counted in
  microseconds, and the `Resolution` enum (`SECONDS`, `MILLISECONDS`, `MICROSECONDS`).
  `Time` is built with `now()`, `monotonic()`, `max()`, `from_microseconds()`,
  `from_milliseconds()`, `from_seconds()`, `from_time_values()` (local time) and
  `from_string()`, and converts back with `to_seconds()`, `to_milliseconds()`,
  `to_microseconds()`, `to_timeval()`, `to_time_values()` and `to_string()`.
  `to_string()` formats in local time and appends the sub-seconds and a `+hhmm`/`-hhmm`
  UTC offset; `from_string()` reads such strings back, treating a string without an offset
  as local time. Times support `+`, `-`, `//` by an integer and `*` by a number.
  `str(t)` gives `seconds.millis.micros`.
- `rockbase.timeout`: `Timeout`, started on creation. `elapsed()` and `time_left()` use the
  stored duration or one passed in; a null duration never elapses and leaves `Time.max()`.
  `restart()` starts counting again.
- `rockbase.timemark`: `TimeMark`, a labelled mark. `passed()` returns the wall-clock time
  since the mark as a `Time`; `cycles()` returns the processor time used since the mark, in
  microseconds.
- `rockbase.temperature`: `Temperature`, stored in kelvin (NaN by default), with
  `from_kelvin()`, `from_celsius()`, the `celsius` property, `is_approx()`, `is_in_range()`,
  comparisons, `+`, `-` and scaling by a number. `kelvin_to_celsius()` and
  `celsius_to_kelvin()` convert plain numbers.
- `rockbase.twist`: `Twist` (linear and angular velocity) and `rockbase.wrench`: `Wrench`
  (force and torque). Both are NaN unless given values, and offer `set_nan()`,
  `set_zero()`, `is_valid()`, `+` and `-`.
- `rockbase.waypoint`: `Waypoint`, a position (default `(1, 0, 0)`) with heading and
  tolerances; `has_valid_position()` and `Waypoint.unknown()`.
- `rockbase.commands`: `LinearAngular6DCommand` (with `x`, `y`, `z`, `roll`, `pitch`, `yaw`
  properties; unset components are NaN), `Motion2D` and `Speed6D`.
- `rockbase.transform_with_covariance`: `TransformWithCovariance`, a rigid 3D transform
  (translation and a `(w, x, y, z)` quaternion) with an optional 6x6 covariance that is
  propagated by `*`/`composition()`, `composition_inv()`, `pre_composition_inv()`,
  `inverse()` and `compose_point_with_covariance()`. A covariance containing NaN counts as
  unknown. The module also provides quaternion helpers: `quaternion_multiply()`,
  `quaternion_inverse()`, `quaternion_rotate()`, `quaternion_to_matrix()`,
  `matrix_to_quaternion()`, `r_to_q()`, `q_to_r()` and `skew_symmetric()`.
- `rockbase.twist_with_covariance`: `TwistWithCovariance`, a velocity twist (`vel`, `rot`)
  with a 6x6 covariance. It supports indexing 0 to 5, `+`, `-`, scaling and division by a
  number, negation, and the spatial cross product with `*` between two twists. Sums and
  cross products keep the covariance symmetric positive semi-definite. `cross_jacobian()`
  returns `[skew(u) skew(v)]`.

## Examples

```python
from rockbase.timestamp import Time, Resolution

t = Time.from_seconds(1.5)
t.to_milliseconds()                               # 1500
(t + Time.from_milliseconds(500)).to_seconds()    # 2.0
text = t.to_string(Resolution.MICROSECONDS)
Time.from_string(text) == t                       # True
```

```python
from rockbase.temperature import Temperature

t = Temperature.from_celsius(25.0)
t.kelvin                                # 298.15
str(t)                                  # "[25.0 celsius]"
```

```python
import numpy as np
from rockbase.transform_with_covariance import TransformWithCovariance

a = TransformWithCovariance(translation=np.array([1.0, 0.0, 0.0]))
b = a * a.inverse()
b.has_valid_covariance()                # False: neither side carried uncertainty
```

## What it does not do

There are no spline curves or trajectory types, and no command-line tool: the package is a
library of value types only.