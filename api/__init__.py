"""HTTP shell for the Aadu Puli Aattam engine."""
