"""
Notices printed by ``seidr --license`` and ``seidr --warranty``.

Taken from the GPLv3 "How to Apply These Terms to Your New Programs".
"""

INTERACTIVE_LICENSE = """\
This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.
"""

INTERACTIVE_WARRANTY = """\
This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.
"""
