"""tdnf install commands and the distroless rpm manifest script."""