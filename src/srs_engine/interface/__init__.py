# Interface Package
